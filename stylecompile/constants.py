"""
Constants shared by the stylesheet compilers.

This module collects MIME types, file extensions, default option sets and the
Node.js bridge scripts used to drive the JavaScript rendering engines.
"""

from typing import Any

# MIME types accepted by each compiler family
LESS_MIME_TYPES = ["text/less"]
SASS_MIME_TYPES = ["text/sass", "text/scss"]
STYLUS_MIME_TYPES = ["text/stylus"]
CSS_MIME_TYPES = ["text/css"]

# Every stylesheet compiler produces plain CSS
OUTPUT_MIME_TYPE = "text/css"

# File extension to input MIME type
EXTENSION_MIME_TYPES: dict[str, str] = {
    ".less": "text/less",
    ".sass": "text/sass",
    ".scss": "text/scss",
    ".styl": "text/stylus",
    ".stylus": "text/stylus",
    ".css": "text/css",
}

# Substituted for a legitimately empty render (e.g. a file made only of imports)
EMPTY_OUTPUT_PLACEHOLDER = " "

DEFAULT_FILE_ENCODING = "utf-8"

# Default engine options per compiler family
LESS_DEFAULT_OPTIONS: dict[str, Any] = {
    "sourceMap": {"sourceMapFileInline": True},
}
SASS_DEFAULT_OPTIONS: dict[str, Any] = {
    "comments": True,
    "sourceMapEmbed": True,
    "sourceMapContents": True,
}
STYLUS_DEFAULT_OPTIONS: dict[str, Any] = {
    "sourcemap": "inline",
    "import": ["nib"],
}

# Imports satisfied by Stylus plugins rather than by files on disk
STYLUS_BUILTIN_IMPORTS = frozenset({"nib"})

# Prefixes of import specifiers that are never resolved to local files
REMOTE_PREFIXES = ("http://", "https://", "//")

# Environment variable overriding the node executable used by Node-backed engines
NODE_EXECUTABLE_ENV = "STYLECOMPILE_NODE"
DEFAULT_NODE_EXECUTABLE = "node"

# Shared stdin/stdout plumbing of the bridge scripts: a JSON payload is read
# from stdin and a JSON result {css, map, imports} is written to stdout.
_BRIDGE_PRELUDE = """
let input = '';
process.stdin.setEncoding('utf8');
process.stdin.on('data', (chunk) => { input += chunk; });
const fail = (err) => {
  const where = err && err.filename ? `${err.filename}:${err.line}:${err.column}\\n` : '';
  process.stderr.write(where + String((err && err.message) || err));
  process.exitCode = 1;
};
const done = (css, map, imports) => {
  process.stdout.write(JSON.stringify({ css: css, map: map || null, imports: imports || [] }));
};
"""

LESS_BRIDGE_SCRIPT = _BRIDGE_PRELUDE + """
process.stdin.on('end', () => {
  const payload = JSON.parse(input);
  const less = require('less');
  less.render(payload.source, payload.options).then(
    (out) => done(out.css, out.map, out.imports),
    fail
  );
});
"""

STYLUS_BRIDGE_SCRIPT = _BRIDGE_PRELUDE + """
process.stdin.on('end', () => {
  const payload = JSON.parse(input);
  const stylus = require('stylus');
  // Plugin names and option maps are applied through the style API, never
  // handed to the renderer, which expects plugin functions under "use"
  const { use, import: imports, include, define, set, ...rest } = payload.options;
  let style;
  try {
    style = stylus(payload.source, rest);
    (use || []).forEach((name) => style.use(require(name)()));
    (imports || []).forEach((name) => style.import(name));
    (include || []).forEach((dir) => style.include(dir));
    Object.entries(define || {}).forEach(([key, value]) => style.define(key, value));
    Object.entries(set || {}).forEach(([key, value]) => style.set(key, value));
    style.set('paths', payload.paths);
  } catch (err) {
    fail(err);
    return;
  }
  style.render((err, css) => {
    if (err) {
      fail(err);
      return;
    }
    // File dependencies come from the walker; plugin files are not reported
    done(css, style.sourcemap, []);
  });
});
"""

# Prints the installed version of a Node package named by argv[1]
NODE_VERSION_SCRIPT = "process.stdout.write(require(process.argv[1] + '/package.json').version)"
