"""Thread safety tests for Spanmark.

Styler and RuleSet are documented as immutable and shareable. These tests
run a shared Styler from many threads and check every result against the
single-threaded answer.
"""

from concurrent.futures import ThreadPoolExecutor

from spanmark import StyleConfig, Styler, apply_styles, style_config_context

SOURCES = [f"line {i}: $red {i}$ and #blue #{i}## \\$literal" for i in range(200)]


class TestStylerThreadSafety:
    def test_shared_styler_concurrent_use(self) -> None:
        styler = Styler({"$": "red", "#": "blue"})
        expected = [styler(source) for source in SOURCES]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(styler, SOURCES))

        assert results == expected

    def test_per_thread_config_does_not_leak(self) -> None:
        def work(index: int) -> tuple[int, str]:
            escape_char = "~" if index % 2 else "\\"
            with style_config_context(StyleConfig(escape_char=escape_char)):
                return index, apply_styles("~$x$ \\$y$", {"$": "red"}).text

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(work, range(64)))

        for index, text in results:
            if index % 2:
                assert text == "$x \\y"
            else:
                assert text == "~x $y"
