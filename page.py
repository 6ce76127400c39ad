import logging
import os
from typing import Callable

from jinja2 import Environment, FileSystemLoader, select_autoescape

from feed import publish_html

# Parameters
# The template has a single ``feed_rows`` slot inside the download table;
# whatever the feed collaborator returns goes there unescaped.
FEED_URL = "http://tmate.org/svn/"
TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")
PAGE_TEMPLATE = "library.html"

PAGE_KEYWORDS = (
    "Subversion,SVN,Version Control,Java,Library,Development,Team,Teamwork,"
    "Configuration Management,Software Configuration Management,SCM,CM,"
    "Revision Control,Collaboration,Open Source,Software Development,"
    "Collaborative Software Development"
)
PAGE_DESCRIPTION = "Pure Java Subversion Library. Open Source, provided by TMate Software"

# Template uses numeric character references only, so the page parses as XML.
env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(["html"]),
    keep_trailing_newline=True,
)


def render_page(publish: Callable[[str], str] = publish_html) -> str:
    """Render the library download page.

    ``publish`` is called once with ``FEED_URL`` and whatever it returns is
    placed in the download table as-is. Its exceptions are not handled.
    """
    fragment = publish(FEED_URL)
    logging.info(f"Rendered library page with {len(fragment)} character feed fragment")
    return env.get_template(PAGE_TEMPLATE).render(
        page_keywords=PAGE_KEYWORDS,
        page_description=PAGE_DESCRIPTION,
        feed_url=FEED_URL,
        feed_rows=fragment,
    )
