from __future__ import annotations

from booklinkcheck.resolve import normalize_id, page_anchors, unique_slugs
from booklinkcheck.resolve.slugs import iter_headings, strip_inline_markup


def test_normalize_id() -> None:
    assert normalize_id("Getting Started") == "getting-started"
    assert normalize_id("What's new in 1.2?") == "whats-new-in-12"
    assert normalize_id("snake_case and-dashes") == "snake_case-and-dashes"
    assert normalize_id("Ünïcode Heading") == "Ünïcode-heading"
    assert normalize_id("Über uns") == "Über-uns"


def test_duplicate_headings_get_numeric_suffix_in_order() -> None:
    assert unique_slugs(["Getting Started", "Getting Started", "Other", "Getting Started"]) == [
        "getting-started",
        "getting-started-1",
        "other",
        "getting-started-2",
    ]


def test_strip_inline_markup() -> None:
    assert strip_inline_markup("The `run` **command** and [docs](x.md)") == "The run command and docs"
    assert strip_inline_markup("_emphasis_ with snake_case") == "emphasis with snake_case"
    assert strip_inline_markup("<em>Tagged</em> ![img](a.png)") == "Tagged img"


def test_iter_headings_atx_setext_and_attributes() -> None:
    content = "\n".join(
        [
            "# Title #",
            "",
            "Setext Heading",
            "==============",
            "",
            "## Custom {#my-id .class}",
            "",
            "```",
            "# not a heading",
            "```",
            "",
            "#hashtag is not a heading",
            "",
            "- list item",
            "---",
        ]
    )

    assert list(iter_headings(content)) == [
        ("Title", None),
        ("Setext Heading", None),
        ("Custom", "my-id"),
    ]


def test_page_anchors_include_html_ids() -> None:
    content = "# Getting Started\n\n# Getting Started\n\n<a id=\"legacy\"></a>\n<span name='old-name'>x</span>\n"

    assert page_anchors(content) == {"getting-started", "getting-started-1", "legacy", "old-name"}
