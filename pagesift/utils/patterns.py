#!/usr/bin/env python3
"""
Pattern tables for the extraction heuristics.

All class/id, locale and URL heuristics live here as data so that new
patterns or locales can be added without touching the algorithms that use
them.
"""

import re

# Class/id heuristics
UNLIKELY_CANDIDATES = re.compile(
    r"-ad-|ai2html|banner|breadcrumbs|combx|comment|community|cover-wrap|disqus|extra|"
    r"footer|gdpr|header|legends|menu|related|remark|replies|rss|shoutbox|sidebar|"
    r"skyscraper|social|sponsor|supplemental|ad-break|agegate|pagination|pager|popup|"
    r"yom-remote",
    re.I,
)
OK_MAYBE_ITS_A_CANDIDATE = re.compile(r"and|article|body|column|content|main|mathjax|shadow", re.I)
POSITIVE = re.compile(
    r"article|body|content|entry|hentry|h-entry|main|page|pagination|post|text|blog|story",
    re.I,
)
NEGATIVE = re.compile(
    r"-ad-|hidden|^hid$| hid$| hid |^hid |banner|combx|comment|com-|contact|footer|gdpr|"
    r"masthead|media|meta|outbrain|promo|related|scroll|share|shoutbox|sidebar|skyscraper|"
    r"sponsor|shopping|tags|widget",
    re.I,
)
BYLINE = re.compile(r"byline|author|dateline|writtenby|p-author", re.I)
SHARE_ELEMENTS = re.compile(r"(\b|_)(share|sharedaddy)(\b|_)", re.I)

# Embeds from these providers survive the sanitizer
VIDEOS = re.compile(
    r"//(www\.)?((dailymotion|youtube|youtube-nocookie|player\.vimeo|v\.qq|bilibili|"
    r"live.bilibili)\.com|(archive|upload\.wikimedia)\.org|player\.twitch\.tv)",
    re.I,
)

# Text
NORMALIZE = re.compile(r"\s{2,}")
TOKENIZE = re.compile(r"\W+")
WHITESPACE = re.compile(r"^\s*$")
HAS_CONTENT = re.compile(r"\S$")
SENTENCE_END = re.compile(r"\.( |$)")
COMMAS = re.compile("[\u002C\u060C\uFE50\uFE10\uFE11\u2E41\u2E34\u2E32\uFF0C]")

# URLs and images
HASH_URL = re.compile(r"^#.+")
SRCSET_URL = re.compile(r"(\S+)(\s+[\d.]+[xw])?(\s*(?:,|$))")
B64_DATA_URL = re.compile(r"^data:\s*([^\s;,]+)\s*;\s*base64\s*,", re.I)
IMAGE_EXTENSION = re.compile(r"\.(jpg|jpeg|png|webp)", re.I)
LAZY_SRCSET = re.compile(r"\.(jpg|jpeg|png|webp)\s+\d")
LAZY_SRC = re.compile(r"^\s*\S+\.(jpg|jpeg|png|webp)\S*\s*$")

# Structured data
JSON_LD_ARTICLE_TYPES = re.compile(
    r"^Article|AdvertiserContentArticle|NewsArticle|AnalysisNewsArticle|AskPublicNewsArticle|"
    r"BackgroundNewsArticle|OpinionNewsArticle|ReportageNewsArticle|ReviewNewsArticle|Report|"
    r"SatiricalArticle|ScholarlyArticle|MedicalScholarlyArticle|SocialMediaPosting|BlogPosting|"
    r"LiveBlogPosting|DiscussionForumPosting|TechArticle|APIReference$"
)
CDATA_WRAPPER = re.compile(r"^\s*<!\[CDATA\[|\]\]>\s*$")
META_PROPERTY = re.compile(
    r"\s*(article|dc|dcterm|og|twitter)\s*:\s*"
    r"(author|creator|description|published_time|title|site_name)\s*",
    re.I,
)
META_NAME = re.compile(
    r"^\s*(?:(dc|dcterm|og|twitter)\s*[.:]\s*)?(author|creator|description|title|site_name)\s*$",
    re.I,
)

# Title heuristics
TITLE_SEPARATORS = r"\|\-–—\\/>»"
TITLE_SEPARATOR = re.compile(r"\s[" + TITLE_SEPARATORS + r"]\s")
TITLE_HIERARCHICAL_SEPARATOR = re.compile(r"\s[\\/>»]\s")

# Locale word lists, matched against the whole text of a node
AD_WORDS = (
    "ad",
    "advertising",
    "advertisement",
    "pub",
    "publicité",
    "werb",
    "werbung",
    "广告",
    "Реклама",
    "Anuncio",
)
LOADING_WORDS = ("loading", "正在加载", "Загрузка", "chargement", "cargando")


def _word_pattern(words, suffix=""):
    alternatives = "|".join(re.escape(word) for word in words)
    return re.compile(r"^(" + alternatives + r")" + suffix + r"$", re.I | re.U)


AD_WORDS_PATTERN = _word_pattern(AD_WORDS)
LOADING_WORDS_PATTERN = _word_pattern(LOADING_WORDS, r"(…|\.\.\.)?")

# ARIA roles that never hold the article
UNLIKELY_ROLES = frozenset(
    ["menu", "menubar", "complementary", "navigation", "alert", "alertdialog", "dialog"]
)

# Tag sets
TAGS_TO_SCORE = frozenset(["section", "h2", "h3", "h4", "h5", "h6", "p", "td", "pre"])
DIV_TO_P_ELEMS = frozenset(["blockquote", "dl", "div", "img", "ol", "p", "pre", "table", "ul"])
ALTER_TO_DIV_EXCEPTIONS = frozenset(["div", "article", "section", "p", "ol", "ul"])
PRESENTATIONAL_ATTRIBUTES = (
    "align",
    "background",
    "bgcolor",
    "border",
    "cellpadding",
    "cellspacing",
    "frame",
    "hspace",
    "rules",
    "style",
    "valign",
    "vspace",
)
DEPRECATED_SIZE_ATTRIBUTE_ELEMS = frozenset(["table", "th", "td", "hr", "pre"])
PHRASING_ELEMS = frozenset(
    [
        "abbr", "audio", "b", "bdo", "br", "button", "cite", "code", "data",
        "datalist", "dfn", "em", "embed", "i", "img", "input", "kbd", "label",
        "mark", "math", "meter", "noscript", "object", "output", "progress", "q",
        "ruby", "samp", "script", "select", "small", "span", "strong", "sub",
        "sup", "textarea", "time", "var", "wbr",
    ]
)
EMPTY_CONTENT_CANDIDATES = frozenset(
    ["div", "section", "header", "h1", "h2", "h3", "h4", "h5", "h6"]
)
DATA_TABLE_DESCENDANTS = ("col", "colgroup", "tfoot", "thead", "th")
TEXTISH_TAGS = (
    "span", "li", "td", "blockquote", "dl", "div", "img", "ol", "p", "pre", "table", "ul",
)
HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
EMBED_TAGS = ("object", "embed", "iframe")

# Tag priors applied when a node is first scored
TAG_SCORES = {
    "div": 5,
    "pre": 3,
    "td": 3,
    "blockquote": 3,
    "address": -3,
    "ol": -3,
    "ul": -3,
    "dl": -3,
    "dd": -3,
    "dt": -3,
    "li": -3,
    "form": -3,
    "h1": -5,
    "h2": -5,
    "h3": -5,
    "h4": -5,
    "h5": -5,
    "h6": -5,
    "th": -5,
}

CLASSES_TO_PRESERVE = ("page",)
