import logging
import os

from dotenv import load_dotenv
from flask import Flask, Response

from feed import publish_html
from page import render_page

# Setup
logging.basicConfig(level=logging.INFO)
load_dotenv()

# Parameters
PAGE_CHARSET = "iso-8859-1"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080

app = Flask(__name__)


@app.get("/")
@app.get("/library.html")
def library_page() -> Response:
    page = render_page(publish_html)
    # Feed text outside Latin-1 goes out as character references
    body = page.encode(PAGE_CHARSET, errors="xmlcharrefreplace")
    return Response(body, content_type=f"text/html; charset={PAGE_CHARSET}")


def main():
    HOST = os.getenv("LIBRARY_PAGE_HOST", DEFAULT_HOST)
    PORT = os.getenv("LIBRARY_PAGE_PORT", str(DEFAULT_PORT))
    DEBUG = os.getenv("LIBRARY_PAGE_DEBUG", "false").lower() == "true"

    try:
        port = int(PORT)
    except ValueError:
        logging.error(f"LIBRARY_PAGE_PORT must be an integer, got {PORT!r}")
        return

    logging.info(f"Serving library page on http://{HOST}:{port}/")
    app.run(host=HOST, port=port, debug=DEBUG)


if __name__ == "__main__":
    main()
