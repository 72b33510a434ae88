APP_ORG = "QuickTools"
APP_NAME = "PyMarkdownPdf"

DEFAULT_FILENAME = "document.pdf"
DEFAULT_PAGE_SIZE = "a4"
DEFAULT_MARGIN = "normal"

CSS_PREVIEW = """
:root { --bg:#ffffff; --fg:#1f2328; --muted:#59636e; --code:#f6f8fa; --border:#d1d9e0; --link:#0969da; }
html,body { background:var(--bg); color:var(--fg); }
body { font-family: -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif; margin: 1.25rem; line-height: 1.5; }
h1,h2 { border-bottom:1px solid var(--border); padding-bottom:.3em; }
h6 { color:var(--muted); }
pre { padding:1rem; overflow:auto; border-radius:6px; background:var(--code); }
code { background:var(--code); padding:.15rem .3rem; border-radius:6px; }
blockquote { border-left:4px solid var(--border); margin:1em 0; padding:.25em .75em; color:var(--muted); }
table { border-collapse: collapse; }
th, td { border:1px solid var(--border); padding:.4rem .6rem; }
th { background:var(--code); }
a { color:var(--link); text-decoration:none; } a:hover { text-decoration:underline; }
hr { border:none; border-top:4px solid var(--border); margin:1.5rem 0; }
ul,ol { padding-left:1.5rem; }
li.task-list-item { list-style-type:none; }
"""

HTML_TEMPLATE = """<!doctype html>
<html>
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1.0"/>
<style>{css}</style>
</head>
<body>
{body}
</body>
</html>
"""

# Shown in the editor when the app starts without a file.
SAMPLE_MARKDOWN = """# Markdown to PDF Converter

## Features
- Live preview
- Export to PDF
- Multiple page sizes
- Configurable margins

## Example Content

**Bold text** and *italic text*

### Lists
- Item 1
- Item 2
- Item 3

### Code
```javascript
console.log('Hello World');
```

Start editing!
"""

SETTINGS_GEOMETRY = "window/geometry"
SETTINGS_SPLITTER = "window/splitter"
SETTINGS_RECENTS = "file/recent"
SETTINGS_PAGE_SIZE = "export/page_size"
SETTINGS_MARGIN = "export/margin"
MAX_RECENTS = 8
