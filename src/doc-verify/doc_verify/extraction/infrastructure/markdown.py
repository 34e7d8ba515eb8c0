"""Markdown sample extractor — finds fenced code samples and their expected output."""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from itertools import islice
from typing import TypeAlias

from doc_verify.article.domain.article import Article
from doc_verify.config.domain.runtime import RuntimeConfig
from doc_verify.extraction.domain.observer import ExtractionObserver
from doc_verify.extraction.domain.sample import Expectation, Sample
from doc_verify.extraction.infrastructure.annotations import (
    AnnotationParser,
    Annotations,
    InvalidFenceInfo,
    parse_fence_info,
)
from doc_verify.extraction.infrastructure.errors import ExtractionMalformedError

_FENCE_OPEN = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})(?P<info>.*)$")

# Info-string language of a block holding the literal output of the block before it.
_OUTPUT_LANGUAGE = "output"

RuntimeName: TypeAlias = str


@dataclass(frozen=True)
class _Fence:
    """A closed fenced block. ``line`` is 1-based; ``end`` indexes the line after the closer."""

    line: int
    info: str
    body: list[str]
    end: int


class MarkdownSampleExtractor:
    """Extracts runnable samples from Markdown articles.

    Only fences whose language is an alias of a configured runtime become
    samples; every other fence is passed over. Expected output comes from
    annotation comments inside the block, or from the block of text directly
    after it (annotation lines, or an ``output`` fence).

    Satisfies the SampleExtractor protocol structurally.
    """

    def __init__(
        self,
        runtimes: dict[RuntimeName, RuntimeConfig],
        observer: ExtractionObserver,
    ) -> None:
        self._observer = observer
        self._languages: dict[str, RuntimeName] = {
            alias.lower(): name
            for name, runtime in runtimes.items()
            for alias in runtime.aliases
        }
        self._parsers: dict[RuntimeName, AnnotationParser] = {
            name: AnnotationParser(comment_prefix=runtime.comment_prefix)
            for name, runtime in runtimes.items()
        }
        self._hints: dict[RuntimeName, dict[str, list[re.Pattern[str]]]] = {
            name: {
                capability: [re.compile(pattern) for pattern in patterns]
                for capability, patterns in runtime.capability_hints.items()
            }
            for name, runtime in runtimes.items()
        }

    def extract(self, article: Article) -> Iterator[Sample]:
        """
        Yield the samples of article lazily, in document order.

        Malformed fences are reported to the observer and skipped; extraction
        always continues with the next line.
        """
        self._observer.extraction_started(article=article.name)
        lines = article.text.splitlines()
        total = 0
        index = 0

        while index < len(lines):
            opener = _match_opener(lines[index])
            if opener is None:
                index += 1
                continue

            try:
                fence = _read_fence(
                    lines=lines, index=index, opener=opener, article=article.name
                )
            except ExtractionMalformedError as exc:
                self._report_malformed(error=exc)
                index += 1
                continue

            index = fence.end
            try:
                sample = self._build_sample(article=article, fence=fence, lines=lines)
            except ExtractionMalformedError as exc:
                self._report_malformed(error=exc)
                continue
            if sample is None:
                continue

            total += 1
            self._observer.sample_extracted(
                sample_id=sample.sample_id,
                language=sample.language,
                has_expectation=not sample.expectation.is_empty,
            )
            yield sample

        self._observer.extraction_completed(article=article.name, total_samples=total)

    def _report_malformed(self, error: ExtractionMalformedError) -> None:
        self._observer.extraction_malformed(
            article=error.article, line=error.line, reason=error.reason
        )

    def _build_sample(
        self, article: Article, fence: _Fence, lines: list[str]
    ) -> Sample | None:
        """Turn a fence into a Sample, or None when its language has no runtime."""
        try:
            info = parse_fence_info(fence.info)
        except InvalidFenceInfo as exc:
            raise ExtractionMalformedError(
                article=article.name, line=fence.line, reason=str(exc)
            ) from exc

        runtime = self._languages.get(info.language)
        if runtime is None:
            return None

        parser = self._parsers[runtime]
        annotations = parser.parse_block(fence.body)
        annotations.extend(
            _following_annotations(lines=lines, start=fence.end, parser=parser)
        )

        source = "\n".join(fence.body) + "\n" if fence.body else ""
        requires = (
            set(info.requires)
            | annotations.requires
            | self._inferred_capabilities(runtime=runtime, source=source)
        )

        return Sample(
            sample_id=f"{article.name}:{fence.line}",
            article=article.name,
            line=fence.line,
            language=runtime,
            source=source,
            expectation=Expectation(lines=annotations.lines, error=annotations.error),
            requires=frozenset(requires),
            skip=info.skip,
        )

    def _inferred_capabilities(self, runtime: RuntimeName, source: str) -> set[str]:
        return {
            capability
            for capability, patterns in self._hints[runtime].items()
            if any(pattern.search(source) for pattern in patterns)
        }


def _match_opener(line: str) -> re.Match[str] | None:
    opener = _FENCE_OPEN.match(line)
    if opener is None:
        return None
    # A backtick fence's info string may not contain backticks (that is inline code).
    if opener.group("fence").startswith("`") and "`" in opener.group("info"):
        return None
    return opener


def _read_fence(
    lines: list[str], index: int, opener: re.Match[str], article: str
) -> _Fence:
    """Read the block opened at lines[index] up to its closing fence.

    Raises:
        ExtractionMalformedError: if the fence is never closed.
    """
    marker = opener.group("fence")
    indent = len(opener.group("indent"))
    closer = re.compile(rf"^ {{0,3}}{re.escape(marker[0])}{{{len(marker)},}}\s*$")

    body: list[str] = []
    for position in range(index + 1, len(lines)):
        line = lines[position]
        if closer.match(line):
            return _Fence(
                line=index + 1,
                info=opener.group("info").strip(),
                body=body,
                end=position + 1,
            )
        body.append(_dedent(line=line, width=indent))

    raise ExtractionMalformedError(
        article=article,
        line=index + 1,
        reason=f"unterminated fence opened with {marker}",
    )


def _dedent(line: str, width: int) -> str:
    """Strip up to width leading spaces, matching the opening fence's indentation."""
    stripped = len(line) - len(line.lstrip(" "))
    return line[min(stripped, width) :]


def _following_annotations(
    lines: list[str], start: int, parser: AnnotationParser
) -> Annotations:
    """Expectation written in the text block right after a sample (blank lines allowed)."""
    position = start
    while position < len(lines) and not lines[position].strip():
        position += 1
    if position >= len(lines):
        return Annotations()

    opener = _match_opener(lines[position])
    if opener is not None:
        language = opener.group("info").strip().lower().split(maxsplit=1)
        if language[:1] != [_OUTPUT_LANGUAGE]:
            return Annotations()
        try:
            fence = _read_fence(lines=lines, index=position, opener=opener, article="")
        except ExtractionMalformedError:
            # Reported when the main scan reaches this fence.
            return Annotations()
        return Annotations(lines=list(fence.body))

    return parser.parse_following(islice(lines, position, None))
