"""Driver programs that wrap sample source for the built-in runtimes.

Each driver reads the sample from stdin, runs it at top level and echoes the
value of a trailing expression the way an interactive prompt would, so that a
sample written as ``2 + 2`` followed by ``// => 4`` checks out. Promises and
timer handles left as the trailing value are not echoed; their callbacks
produce the documented output.
"""

import sys

JAVASCRIPT_DRIVER = """\
const vm = require("node:vm");
const source = require("node:fs").readFileSync(0, "utf8");
const value = vm.runInThisContext(source, { filename: "sample.js" });
const pending =
  value !== null &&
  (typeof value === "object" || typeof value === "function") &&
  typeof value.then === "function";
const timer =
  value instanceof Object &&
  ["Timeout", "Immediate"].includes(value.constructor?.name);
if (value !== undefined && !pending && !timer) {
  console.log(value);
}
"""

PYTHON_DRIVER = """\
import ast
import sys

source = sys.stdin.read()
tree = ast.parse(source, "<sample>")
trailing = None
if tree.body and isinstance(tree.body[-1], ast.Expr):
    trailing = ast.Expression(tree.body.pop().value)
namespace = {"__name__": "__main__"}
exec(compile(tree, "<sample>", "exec"), namespace)
if trailing is not None:
    value = eval(compile(trailing, "<sample>", "eval"), namespace)
    if value is not None:
        print(repr(value))
"""


def javascript_command(executable: str = "node") -> list[str]:
    return [executable, "-e", JAVASCRIPT_DRIVER]


def python_command(executable: str | None = None) -> list[str]:
    return [executable or sys.executable, "-c", PYTHON_DRIVER]
