from __future__ import annotations

import re
from contextlib import asynccontextmanager
from typing import Callable, Optional
from urllib.parse import quote_plus

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from search_e2e.selectors.search_page import GoogleSelectors

pytest_plugins = ("search_e2e.testing.plugin", "pytester")

HOME_URL = "https://www.google.com/"


class _DummyElement:
    def __init__(
        self,
        text: Optional[str] = "",
        *,
        visible: bool = True,
        enabled: bool = True,
        attributes: Optional[dict[str, str]] = None,
        children: Optional[dict[str, list["_DummyElement"]]] = None,
        on_click: Optional[Callable[["_DummyPage"], None]] = None,
        on_press: Optional[Callable[["_DummyPage", "_DummyElement", str], None]] = None,
    ) -> None:
        self.text = text
        self.visible = visible
        self.enabled = enabled
        self.attributes = dict(attributes or {})
        self.children = dict(children or {})
        self.on_click = on_click
        self.on_press = on_press
        self.value = ""
        self.clicks = 0
        self.pressed: list[str] = []
        self.scrolled = False
        self.cleared = 0


class _DummyLocator:
    def __init__(
        self,
        page: "_DummyPage",
        selector: str,
        *,
        parent: Optional["_DummyLocator"] = None,
        index: Optional[int] = None,
        has: Optional["_DummyLocator"] = None,
    ) -> None:
        self.page = page
        self.selector = selector
        self._parent = parent
        self._index = index
        self._has = has

    def _matches(self) -> list[_DummyElement]:
        if self._parent is None:
            elements = list(self.page.elements.get(self.selector, []))
        else:
            elements = [
                child
                for element in self._parent._matches()
                for child in element.children.get(self.selector, [])
            ]
        if self._has is not None:
            elements = [element for element in elements if element.children.get(self._has.selector)]
        if self._index is None:
            return elements
        index = self._index if self._index >= 0 else len(elements) + self._index
        return [elements[index]] if 0 <= index < len(elements) else []

    def _single(self, timeout: Optional[float] = None) -> _DummyElement:
        matches = self._matches()
        if not matches:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selector}")
        return matches[0]

    @property
    def first(self) -> "_DummyLocator":
        return _DummyLocator(self.page, self.selector, parent=self._parent, index=0, has=self._has)

    def nth(self, index: int) -> "_DummyLocator":
        return _DummyLocator(self.page, self.selector, parent=self._parent, index=index, has=self._has)

    def filter(self, has: Optional["_DummyLocator"] = None) -> "_DummyLocator":
        return _DummyLocator(self.page, self.selector, parent=self._parent, index=self._index, has=has)

    def locator(self, selector: str) -> "_DummyLocator":
        return _DummyLocator(self.page, selector, parent=self)

    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        self.page.waits.append((self.selector, state, timeout))
        visible = any(element.visible for element in self._matches())
        if state == "visible" and not visible:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selector} to be visible")
        if state == "hidden" and visible:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selector} to be hidden")

    async def click(self, force: bool = False, timeout: Optional[float] = None) -> None:
        element = self._single(timeout)
        if not element.visible and not force:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded clicking {self.selector}")
        element.clicks += 1
        if element.on_click:
            element.on_click(self.page)

    async def clear(self) -> None:
        element = self._single()
        element.value = ""
        element.cleared += 1

    async def fill(self, value: str) -> None:
        self._single().value = value

    async def press(self, key: str) -> None:
        element = self._single()
        element.pressed.append(key)
        if element.on_press:
            element.on_press(self.page, element, key)

    async def input_value(self) -> str:
        return self._single().value

    async def text_content(self) -> Optional[str]:
        return self._single().text

    async def all_text_contents(self) -> list[str]:
        return [element.text or "" for element in self._matches()]

    async def is_enabled(self) -> bool:
        return self._single().enabled

    async def is_visible(self) -> bool:
        matches = self._matches()
        return bool(matches) and matches[0].visible

    async def get_attribute(self, name: str) -> Optional[str]:
        return self._single().attributes.get(name)

    async def scroll_into_view_if_needed(self) -> None:
        self._single().scrolled = True

    async def count(self) -> int:
        return len(self._matches())


class _DummyPage:
    def __init__(self, url: str = "about:blank", title: str = "") -> None:
        self.url = url
        self._title = title
        self.html = "<html><body></body></html>"
        self.elements: dict[str, list[_DummyElement]] = {}
        self.waits: list[tuple[str, str, Optional[float]]] = []
        self.gotos: list[tuple[str, Optional[str]]] = []
        self.load_states: list[str] = []
        self.sleeps: list[float] = []
        self.screenshots: list[tuple[object, bool]] = []
        self.history: list[str] = []
        self.reloads = 0

    def add(self, selector: str, *elements: _DummyElement) -> list[_DummyElement]:
        self.elements.setdefault(selector, []).extend(elements)
        return list(elements)

    def load(self, url: str, title: str = "", elements: Optional[dict[str, list[_DummyElement]]] = None) -> None:
        """Simulate a navigation: new URL, new title, new DOM."""
        self.history.append(self.url)
        self.url = url
        self._title = title
        self.elements = dict(elements or {})

    def locator(self, selector: str) -> _DummyLocator:
        return _DummyLocator(self, selector)

    async def goto(self, url: str, wait_until: Optional[str] = None) -> None:
        self.gotos.append((url, wait_until))
        self.history.append(self.url)
        self.url = url

    async def wait_for_load_state(self, state: str = "load") -> None:
        self.load_states.append(state)

    async def wait_for_url(self, url: object, timeout: Optional[float] = None) -> None:
        if callable(url):
            matched = url(self.url)
        elif isinstance(url, re.Pattern):
            matched = bool(url.search(self.url))
        else:
            matched = url == self.url
        if not matched:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for URL")

    async def title(self) -> str:
        return self._title

    async def content(self) -> str:
        return self.html

    async def reload(self) -> None:
        self.reloads += 1

    async def go_back(self) -> None:
        if self.history:
            self.url = self.history.pop()

    async def wait_for_timeout(self, milliseconds: float) -> None:
        self.sleeps.append(milliseconds)

    async def screenshot(self, path: object = None, full_page: bool = False) -> bytes:
        self.screenshots.append((path, full_page))
        return b""

    @asynccontextmanager
    async def expect_navigation(self, wait_until: Optional[str] = None):
        before = self.url
        yield
        if self.url == before:
            raise PlaywrightTimeoutError("Timeout exceeded waiting for navigation")
        self.load_states.append(wait_until or "load")


SAMPLE_RESULTS = (
    ("https://playwright.dev/", "Playwright: Fast and reliable end-to-end testing"),
    ("https://github.com/microsoft/playwright", "GitHub - microsoft/playwright"),
    ("https://en.wikipedia.org/wiki/Test_automation", "Test automation - Wikipedia"),
)


def _destination(href: str, title: str) -> Callable[[_DummyPage], None]:
    def _open(page: _DummyPage) -> None:
        page.load(href, title=title)

    return _open


def render_results(page: _DummyPage, query: str, results=SAMPLE_RESULTS) -> None:
    """Replace the DOM with a results page for ``query``."""
    titles = [_DummyElement(title) for _, title in results]
    links = [
        _DummyElement(
            "",
            attributes={"href": href},
            children={GoogleSelectors.result_heading: [heading]},
            on_click=_destination(href, title),
        )
        for (href, title), heading in zip(results, titles)
    ]
    page.load(
        f"https://www.google.com/search?q={quote_plus(query)}",
        title=f"{query} - Google Search",
        elements={
            GoogleSelectors.results_container: [_DummyElement("")],
            GoogleSelectors.result_stats: [_DummyElement(f"About {len(results)} results")],
            GoogleSelectors.result_titles: titles,
            GoogleSelectors.result_heading: titles,
            GoogleSelectors.result_links: links,
            GoogleSelectors.any_link: links,
        },
    )


def _submit_on_enter(page: _DummyPage, element: _DummyElement, key: str) -> None:
    if key == "Enter" and element.value:
        render_results(page, element.value)


def build_home(page: _DummyPage, *, consent: bool = False) -> _DummyElement:
    """Populate ``page`` with the search home page and return the search box."""
    search_box = _DummyElement("", on_press=_submit_on_enter)

    def _submit_with_button(current: _DummyPage) -> None:
        render_results(current, search_box.value)

    page.load(HOME_URL, title="Google")
    page.add(GoogleSelectors.logo, _DummyElement(""))
    page.add(GoogleSelectors.search_input, search_box)
    page.add(GoogleSelectors.search_button, _DummyElement("Google Search", on_click=_submit_with_button))
    if consent:
        dialog_button = _DummyElement("Accept all")

        def _dismiss(current: _DummyPage) -> None:
            current.elements.pop(GoogleSelectors.cookie_accept_button(), None)

        dialog_button.on_click = _dismiss
        page.add(GoogleSelectors.cookie_accept_button(), dialog_button)
    return search_box


@pytest.fixture
def dummy_page() -> _DummyPage:
    return _DummyPage()


@pytest.fixture
def element_factory() -> type[_DummyElement]:
    return _DummyElement


@pytest.fixture
def home_page() -> _DummyPage:
    page = _DummyPage()
    build_home(page)
    return page


@pytest.fixture
def consent_home_page() -> _DummyPage:
    page = _DummyPage()
    build_home(page, consent=True)
    return page


@pytest.fixture
def results_page() -> _DummyPage:
    page = _DummyPage()
    render_results(page, "Playwright automation")
    return page
