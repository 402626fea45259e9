import json

from click.testing import CliRunner

from till import __version__
from till import cli as till_cli


def _invoke(*args, env=None):
    return CliRunner().invoke(till_cli.main, list(args), env=env)


def test_version_flag():
    result = _invoke("--version")
    assert result.exit_code == 0
    assert f"till version {__version__}" in result.output


def test_demo_prints_reference_totals():
    result = _invoke("demo")
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["Buy1Get1Free Total: 16.98", "10Percent Total: 19.67"]


def test_total_with_named_deal():
    result = _invoke("total", "A0002", "A0001", "A0002", "--deal", "A0002:Buy1Get1Free")
    assert result.exit_code == 0, result.output
    assert "A0002 x2 [A0002:Buy1Get1Free]  3.99" in result.output
    assert "Total: 16.98" in result.output


def test_total_json_output():
    result = _invoke("total", "A0002", "A0001", "A0002", "--deal", "A0001:10Percent", "--json")
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["total"] == 1967
    assert payload["display"] == "19.67"
    assert [row["product"] for row in payload["lines"]] == ["A0002", "A0001"]
    assert payload["lines"][1]["deal"] == "A0001:10Percent"


def test_total_all_deals_applies_each_in_file_order():
    result = _invoke("total", "A0002", "A0002", "A0001", "--all-deals", "--json")
    assert json.loads(result.output)["total"] == 399 + 1169


def test_unknown_identifier_is_skipped_by_default():
    result = _invoke("total", "A0001", "Z9999")
    assert result.exit_code == 0, result.output
    assert "SKIP: Z9999" in result.output
    assert "Total: 12.99" in result.output


def test_unknown_identifier_fails_when_strict():
    result = _invoke("total", "A0001", "Z9999", "--strict", "--json")
    assert result.exit_code == 2
    payload = json.loads(result.output)
    assert payload["ok"] is False
    assert payload["error"]["code"] == "PRODUCT_NOT_FOUND"


def test_strict_scan_from_environment():
    result = _invoke("total", "Z9999", env={"TILL_STRICT_SCAN": "true"})
    assert result.exit_code == 2
    assert "[SCAN:PRODUCT_NOT_FOUND]" in result.output


def test_unknown_deal_name_is_an_error():
    result = _invoke("total", "A0001", "--deal", "nope")
    assert result.exit_code == 2
    assert "DEAL_NOT_FOUND" in result.output


def test_padded_display_from_environment(tmp_path):
    prices = tmp_path / "prices.toml"
    prices.write_text("[products]\nC0001 = 1305\n", encoding="utf-8")

    plain = _invoke("--price-list", str(prices), "total", "C0001")
    padded = _invoke("--price-list", str(prices), "total", "C0001", env={"TILL_PAD_MINOR_UNITS": "1"})

    assert "Total: 13.5" in plain.output
    assert "Total: 13.05" in padded.output


def test_catalog_and_deals_listing(tmp_path):
    prices = tmp_path / "prices.json"
    prices.write_text(
        json.dumps({"products": {"A0001": 1299}, "deals": [{"product": "A0001", "kind": "percentage", "percent": 5}]}),
        encoding="utf-8",
    )

    catalog = _invoke("--price-list", str(prices), "catalog", "--json")
    deals = _invoke("--price-list", str(prices), "deals")

    assert json.loads(catalog.output) == [{"product": "A0001", "price": 1299}]
    assert "A0001:5Percent  product=A0001 kind=5Percent" in deals.output


def test_bad_price_list_reports_structured_error(tmp_path):
    prices = tmp_path / "prices.toml"
    prices.write_text("[products]\nA0001 = -5\n", encoding="utf-8")

    result = _invoke("--price-list", str(prices), "catalog")

    assert result.exit_code == 2
    assert "[PRICE_LIST:CATALOG_FORMAT]" in result.output


def test_non_utf8_price_list_reports_structured_error(tmp_path):
    prices = tmp_path / "bad.toml"
    prices.write_bytes(b"[products]\nA\xff = 1\n")

    result = _invoke("--price-list", str(prices), "catalog")

    assert result.exit_code == 2
    assert "[PRICE_LIST:CATALOG_FORMAT]" in result.output


def test_deal_and_all_deals_are_mutually_exclusive():
    result = _invoke("total", "A0001", "--deal", "A0001:10Percent", "--all-deals")

    assert result.exit_code == 2
    assert "--deal or --all-deals" in result.output
