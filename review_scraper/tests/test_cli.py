import json

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from review_scraper import cli
from review_scraper.core.exceptions import RendererError, RetryExhaustedError
from review_scraper.tests.fakes import FakePageDriver, FakeSite, review_fragment


@pytest.fixture(autouse=True)
def keep_logging_config():
    """run_cli reconfigures logging; stub it so tests do not replace pytest's handlers."""
    with patch("review_scraper.cli.setup_logging") as mock_setup:
        yield mock_setup


@pytest.fixture
def input_csv(tmp_path):
    path = tmp_path / "restaurants.csv"
    path.write_text(
        "Name,Ranking,Url\n"
        "Alpha,1,https://example.test/alpha\n"
        "Beta,2,https://example.test/beta\n",
        encoding="utf-8",
    )
    return str(path)


def _fake_browser(driver):
    """Stands in for PlaywrightManager: an async context manager exposing `driver`."""
    manager = MagicMock()
    manager.driver = driver
    manager.__aenter__ = AsyncMock(return_value=manager)
    manager.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=manager)


def test_parser_requires_input_and_output():
    parser = cli.build_arg_parser()
    with pytest.raises(SystemExit) as excinfo:
        parser.parse_args(["only_input.csv"])
    assert excinfo.value.code == 2


def test_parser_options():
    args = cli.build_arg_parser().parse_args(
        ["in.csv", "out.json", "--env", "production", "--log-level", "DEBUG", "--headed"]
    )
    assert (args.input, args.output, args.env, args.log_level, args.headed) == (
        "in.csv", "out.json", "production", "DEBUG", True
    )


def test_successful_run_writes_results_and_exits_zero(input_csv, tmp_path):
    driver = FakePageDriver({
        "https://example.test/alpha": FakeSite(address="1 A St", pages=[[review_fragment(title="yum")]]),
        "https://example.test/beta": FakeSite(address="2 B St", pages=[[]]),
    })
    output = tmp_path / "out" / "reviews.json"

    with patch("review_scraper.cli.PlaywrightManager", _fake_browser(driver)) as browser_cls:
        code = cli.run_cli([input_csv, str(output)])

    assert code == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert [(r["Name"], r["Address"], len(r["Reviews"])) for r in data] == [("Alpha", "1 A St", 1), ("Beta", "2 B St", 0)]
    assert browser_cls.call_args.kwargs["headless"] is None


def test_headed_flag_turns_off_headless(input_csv, tmp_path):
    driver = FakePageDriver({
        "https://example.test/alpha": FakeSite(),
        "https://example.test/beta": FakeSite(),
    })
    with patch("review_scraper.cli.PlaywrightManager", _fake_browser(driver)) as browser_cls:
        cli.run_cli([input_csv, str(tmp_path / "out.json"), "--headed"])
    assert browser_cls.call_args.kwargs["headless"] is False


def test_exhausted_retries_exit_one_after_writing_partial_results(input_csv, tmp_path):
    output = tmp_path / "partial.json"

    async def exhausted(state, out, *args, **kwargs):
        cli.FileStorage().save_results([], out)
        raise RetryExhaustedError(5, RendererError("browser crashed"))

    with patch("review_scraper.cli.scrape", side_effect=exhausted):
        code = cli.run_cli([input_csv, str(output)])

    assert code == 1
    assert json.loads(output.read_text(encoding="utf-8")) == []


def test_missing_input_exits_one(tmp_path):
    assert cli.run_cli([str(tmp_path / "missing.csv"), str(tmp_path / "out.json")]) == 1


def test_unknown_environment_exits_one(input_csv, tmp_path):
    code = cli.run_cli([input_csv, str(tmp_path / "out.json"), "--env", "does-not-exist"])
    cli.config_manager.load_config()
    assert code == 1


def test_browser_start_failure_exits_one(input_csv, tmp_path):
    manager = MagicMock()
    manager.__aenter__ = AsyncMock(side_effect=RendererError("Failed to initialize Playwright or launch browser chromium"))
    manager.__aexit__ = AsyncMock(return_value=False)

    with patch("review_scraper.cli.PlaywrightManager", MagicMock(return_value=manager)):
        assert cli.run_cli([input_csv, str(tmp_path / "out.json")]) == 1
