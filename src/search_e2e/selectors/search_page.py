"""Centralised selectors for the Google search pages.

These track the live DOM of a third-party site; when Google reshuffles its
markup this is the only file that should need an update.
"""
from __future__ import annotations

import re


class GoogleSelectors:
    home_url = "https://www.google.com"
    search_input = 'textarea[name="q"]'
    search_button = 'input[name="btnK"]'
    lucky_button = 'input[name="btnI"]'
    results_container = "#search"
    result_stats = "#result-stats"
    result_titles = "#search h3"
    result_links = "#search a[href]"
    result_items = "#search .g"
    result_heading = "h3"
    any_link = "a"
    logo = 'img[alt="Google"]'
    suggestions = 'ul[role="listbox"] li'
    cookie_accept_buttons = (
        'button:has-text("Accept all")',
        'button:has-text("I agree")',
        'button:has-text("Accept")',
        "#L2AGLb",
    )
    search_path = "/search"
    query_param = "q"
    results_url_pattern = re.compile(r"/search\?", re.IGNORECASE)

    @staticmethod
    def cookie_accept_button() -> str:
        return ", ".join(GoogleSelectors.cookie_accept_buttons)
