# File: tests/test_main_content.py
from page_signals.parser import main_content
from page_signals.parser.main_content import (
    BOILERPLATE_SELECTORS,
    find_main_container,
    isolate_main,
    strip_boilerplate,
)


def test_main_element_is_used(make_document):
    doc = make_document("<nav>Menu</nav><main><p>Article text</p></main><footer>Foot</footer>")
    assert isolate_main(doc) == "Article text"


def test_selector_priority_beats_document_order(make_document):
    doc = make_document('<div class="content">Secondary</div><main>Primary</main>')
    assert isolate_main(doc) == "Primary"


def test_role_main(make_document):
    doc = make_document('<header>Top</header><div role="main">Role based</div>')
    assert isolate_main(doc) == "Role based"


def test_fallback_strips_boilerplate(make_document):
    doc = make_document(
        "<header>Site header</header>"
        "<div><p>Body copy</p></div>"
        '<div class="ad-banner">Buy now</div>'
        '<div class="cookie-banner">We use cookies</div>'
        "<aside>Related</aside>"
        "<footer>Site footer</footer>"
    )
    assert isolate_main(doc) == "Body copy"


def test_fallback_leaves_document_untouched(make_document):
    doc = make_document("<header>Site header</header><p>Body copy</p><footer>F</footer>")
    isolate_main(doc)
    assert doc.soup.find("header") is not None
    assert doc.soup.find("footer") is not None


def test_invalid_boilerplate_selector_is_skipped(make_document, monkeypatch):
    warnings = []
    monkeypatch.setattr(main_content.logger, "warning", lambda *args: warnings.append(args))
    doc = make_document("<header>Head</header><p>Body copy</p><footer>Foot</footer>")

    text = isolate_main(doc, boilerplate_selectors=("header", "!!invalid", "footer"))

    assert text == "Body copy"
    assert len(warnings) == 1
    assert "!!invalid" in warnings[0]


def test_invalid_main_selector_is_skipped(make_document, monkeypatch):
    monkeypatch.setattr(main_content.logger, "warning", lambda *args: None)
    doc = make_document("<nav>Menu</nav><article>Story</article>")
    assert isolate_main(doc, main_selectors=("!!bad", "article")) == "Story"


def test_find_main_container_none(make_document):
    assert find_main_container(make_document("<p>plain</p>")) is None


def test_strip_boilerplate_skips_already_detached_matches(make_document):
    doc = make_document(
        '<nav><p>x</p></nav><div class="sidebar"><div class="widget">w</div></div><p>keep</p>'
    )
    removed = strip_boilerplate(doc.body, BOILERPLATE_SELECTORS)
    assert removed == 2
    assert doc.body.get_text() == "keep"


def test_page_with_only_boilerplate(make_document):
    assert isolate_main(make_document("<nav>Menu</nav><footer>Foot</footer>")) == ""
