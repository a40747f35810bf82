"""End-to-end tests of the ``calor`` command line, against a temporary
data directory."""

import json
from datetime import datetime, timezone

import pytest
import structlog
from click.testing import CliRunner

from calor.infrastructure.cli.dates import utc_end_of_day, utc_start_of_day
from calor.infrastructure.cli.main import cli


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("CALOR_DATA_DIR", str(tmp_path))
    yield tmp_path
    # The CLI binds log output to the runner's stderr, which is closed afterwards
    structlog.reset_defaults()


@pytest.fixture
def runner():
    return CliRunner()


def _run(runner, *args):
    return runner.invoke(cli, list(args))


def _seed(runner):
    assert _run(runner, "promo", "add", "--code", "save10", "--type", "percentage",
                "--value", "10").exit_code == 0
    assert _run(runner, "gift-card", "issue", "--balance", "20.00",
                "--code", "gift-20").exit_code == 0
    assert _run(runner, "loyalty", "award", "--customer", "cust-1",
                "--points", "2000").exit_code == 0


_CART = ["--item", "vibe-1:rose:2500:2", "--customer", "cust-1",
         "--promo", "SAVE10", "--gift-card", "GIFT-20", "--points", "2000"]


# ── Admin commands ───────────────────────────────────────────────────────────


class TestAdminCommands:

    def test_promo_add_and_list(self, runner):
        result = _run(runner, "promo", "add", "--code", "welcome", "--type",
                      "fixed_amount", "--value", "500", "--usage-limit", "100",
                      "--min-order", "30.00")
        assert result.exit_code == 0
        assert "Promo WELCOME added" in result.output

        result = _run(runner, "promo", "list")
        assert "WELCOME" in result.output
        assert "0/100" in result.output
        assert "$30.00" in result.output

    def test_promo_list_empty(self, runner):
        result = _run(runner, "promo", "list")
        assert "No promo codes found." in result.output

    def test_duplicate_promo_is_an_error(self, runner):
        _run(runner, "promo", "add", "--code", "X1", "--type", "free_shipping")
        result = _run(runner, "promo", "add", "--code", "x1", "--type", "free_shipping")
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_gift_card_issue_and_check(self, runner):
        result = _run(runner, "gift-card", "issue", "--balance", "$50", "--code", "bday-1")
        assert "Gift card BDAY-1 issued with $50.00" in result.output

        result = _run(runner, "gift-card", "check", "--code", "bday-1")
        assert "Gift card BDAY-1: $50.00 remaining" in result.output

    def test_unknown_gift_card(self, runner):
        result = _run(runner, "gift-card", "check", "--code", "nope")
        assert result.exit_code == 1
        assert "Invalid gift card code" in result.output

    def test_bad_money_amount(self, runner):
        result = _run(runner, "gift-card", "issue", "--balance", "lots")
        assert result.exit_code == 1
        assert "Invalid money amount" in result.output

    def test_non_finite_money_amount(self, runner):
        result = _run(runner, "promo", "add", "--code", "inf", "--type", "percentage",
                      "--value", "10", "--min-order", "Infinity")
        assert result.exit_code == 1
        assert "must be finite" in result.output

    def test_gift_card_usable_through_its_expiry_date(self, runner, data_dir):
        today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        _run(runner, "gift-card", "issue", "--balance", "10.00", "--code", "last-day",
             "--expires-at", today)

        result = _run(runner, "gift-card", "check", "--code", "last-day")
        assert result.exit_code == 0
        assert "$10.00 remaining" in result.output
        cards = json.loads((data_dir / "gift_cards.json").read_text())
        assert cards[0]["expires_at"] == f"{today}T23:59:59.999999+00:00"

    def test_promo_window_covers_whole_days(self, runner, data_dir):
        result = _run(runner, "promo", "add", "--code", "march", "--type", "free_shipping",
                      "--starts-at", "2026-03-01", "--ends-at", "2026-03-31")
        assert result.exit_code == 0

        promos = json.loads((data_dir / "promotions.json").read_text())
        assert promos[0]["starts_at"] == "2026-03-01T00:00:00+00:00"
        assert promos[0]["ends_at"] == "2026-03-31T23:59:59.999999+00:00"

    def test_loyalty_award_and_show(self, runner):
        result = _run(runner, "loyalty", "award", "--customer", "cust-1", "--points", "250")
        assert "Awarded 250 points to cust-1 (balance 250)" in result.output

        result = _run(runner, "loyalty", "show", "--customer", "cust-1")
        assert "Customer cust-1: 250 points (worth $2.00)" in result.output
        assert "Lifetime points: 250" in result.output


# ── Checkout ─────────────────────────────────────────────────────────────────


class TestCheckoutCommands:

    def test_quote(self, runner):
        _seed(runner)
        result = _run(runner, "checkout", "quote", *_CART)

        assert result.exit_code == 0
        assert "$50.00" in result.output
        assert "-$5.00" in result.output
        assert "Total" in result.output
        assert "$17.00" in result.output

    def test_quote_clamps_points_with_note(self, runner):
        _seed(runner)
        result = _run(runner, "checkout", "quote", "--item", "oil-1::9000:1",
                      "--customer", "cust-1", "--points", "9999")
        assert result.exit_code == 0
        assert "Note: Only 2000 points available" in result.output

    def test_place_order_then_show(self, runner, data_dir):
        _seed(runner)
        result = _run(runner, "checkout", "place", *_CART, "--expected-total", "1700")

        assert result.exit_code == 0
        assert "Order #1 placed." in result.output
        assert "Points earned: 17" in result.output

        result = _run(runner, "order", "show", "--id", "1")
        assert "Gift card GIFT-20" in result.output
        assert "$17.00" in result.output

        result = _run(runner, "gift-card", "check", "--code", "GIFT-20")
        assert result.exit_code == 1
        assert "no remaining balance" in result.output

        accounts = json.loads((data_dir / "loyalty_accounts.json").read_text())
        assert accounts[0]["points"] == 17

    def test_place_rejects_mismatched_total(self, runner, data_dir):
        _seed(runner)
        result = _run(runner, "checkout", "place", *_CART, "--expected-total", "1000")

        assert result.exit_code == 1
        assert "Order total mismatch" in result.output
        assert json.loads((data_dir / "orders.json").read_text()) == []
        cards = json.loads((data_dir / "gift_cards.json").read_text())
        assert cards[0]["balance_cents"] == 2000

    def test_place_requires_customer(self, runner):
        result = _run(runner, "checkout", "place", "--item", "a::100:1",
                      "--expected-total", "1300")
        assert result.exit_code == 2

    def test_bad_item_format(self, runner):
        result = _run(runner, "checkout", "quote", "--item", "just-a-product")
        assert result.exit_code != 0
        assert "Invalid item format" in result.output

    def test_missing_order(self, runner):
        result = _run(runner, "order", "show", "--id", "9")
        assert result.exit_code == 1
        assert "Order #9 not found" in result.output


class TestConfiguration:

    def test_invalid_environment_is_reported(self, runner, monkeypatch):
        monkeypatch.setenv("CALOR_FLAT_SHIPPING_CENTS", "lots")
        result = _run(runner, "promo", "list")
        assert result.exit_code == 1
        assert "CALOR_FLAT_SHIPPING_CENTS must be an integer" in result.output

    def test_flat_fee_from_environment(self, runner, monkeypatch):
        monkeypatch.setenv("CALOR_FLAT_SHIPPING_CENTS", "500")
        result = _run(runner, "checkout", "quote", "--item", "a::1000:1")
        assert "$15.00" in result.output


# ── Dates ────────────────────────────────────────────────────────────────────


class TestCommandLineDates:

    def test_end_of_day_is_last_instant_in_utc(self):
        assert utc_end_of_day(datetime(2026, 12, 31)) == datetime(
            2026, 12, 31, 23, 59, 59, 999999, tzinfo=timezone.utc
        )

    def test_start_of_day_is_midnight_in_utc(self):
        assert utc_start_of_day(datetime(2026, 3, 1)) == datetime(
            2026, 3, 1, tzinfo=timezone.utc
        )

    def test_missing_dates_stay_missing(self):
        assert utc_start_of_day(None) is None
        assert utc_end_of_day(None) is None
