from __future__ import annotations

from string import Template

BASE_HTML = Template(
    """<!doctype html>
<html>
  <head>
    <meta charset="utf-8" />
    <title>$title</title>
  </head>
  <body>
    <div id="root">$fragment</div>
    <script>
      (function () {
        var root = document.getElementById("root");
        var proto = location.protocol === "https:" ? "wss://" : "ws://";
        var ws = new WebSocket(proto + location.host + "/ws");
        ws.onmessage = function (ev) {
          var msg = JSON.parse(ev.data);
          if (msg.type === "html") {
            root.innerHTML = msg.html;
          }
        };
      })();
    </script>
  </body>
</html>
"""
)


def render_page(fragment: str, *, title: str = "tinyreact") -> str:
    return BASE_HTML.substitute(title=title, fragment=fragment)
