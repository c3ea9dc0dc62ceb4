"""Common literal values used across mdsite.

These constants keep artifact filenames, category names, and content
extensions centralized so the scanner, generators, runtime services, and tests
import the same values without drifting. Intended for internal use within the
mdsite package.

Examples
--------
>>> from mdsite import _constants
>>> _constants.CONTENT_INDEX_PATH
'content/index.json'
>>> "blog" in _constants.FIXED_CATEGORIES
True
"""

BLOG = "blog"
PROJECTS = "projects"
FEATURES = "features"
ARTICLES = "articles"
DOCS = "docs"

FIXED_CATEGORIES = (BLOG, PROJECTS, FEATURES, ARTICLES, DOCS)

CONTENT_DIR = "content"
CONTENT_INDEX_FILENAME = "index.json"
CONTENT_INDEX_PATH = f"{CONTENT_DIR}/{CONTENT_INDEX_FILENAME}"
NAVIGATION_INDEX_PATH = "navigation-index.json"
CONTENT_METADATA_PATH = "content-metadata.json"
SEARCH_INDEX_PATH = "search-index.json"
SITE_CONFIG_FILENAME = "site.config.json"

CONTENT_EXTENSIONS = (".md", ".mdx")
INDEX_FILENAMES = ("index.md", "index.mdx")

WORDS_PER_MINUTE = 200
DEFAULT_TOC_DEPTH = 3
MAX_HEADING_LEVEL = 6
SEARCH_TEXT_LENGTH = 500
SITEMAP_PATH = "sitemap.xml"
ROBOTS_PATH = "robots.txt"
FEED_PATH = "feed.xml"
FEED_ITEM_LIMIT = 20

ROUTE_PREFIXES = {BLOG: "blog", PROJECTS: "project", ARTICLES: "article", DOCS: "docs"}
DEFAULT_SITE_URL = "https://example.com"
DEFAULT_SITE_NAME = "mdsite"
