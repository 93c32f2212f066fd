"""Tests for the deterministic invoice text heuristics."""
from quote_autopilot.core.models import CATEGORY_IT, CATEGORY_OTHER
from quote_autopilot.processing import heuristics


SAMPLE_TEXT = "株式会社Foo 合計 ¥300,000円 Web開発"


def test_extract_reads_company_amount_services_and_category():
    result = heuristics.extract(SAMPLE_TEXT)

    assert result.company_name == "Foo"
    assert result.total_amount == 300000
    assert "Web開発" in result.services
    assert result.business_category == CATEGORY_IT


def test_company_name_before_legal_suffix():
    assert heuristics.extract_company_name("ABC株式会社 御中") == "ABC"


def test_company_name_prefers_name_before_suffix_over_title():
    assert heuristics.extract_company_name("ABC株式会社 代表取締役") == "ABC"


def test_company_name_skips_postcode_after_suffix():
    assert heuristics.extract_company_name("テスト株式会社 〒100-0001 東京都千代田区") == "テスト"


def test_company_name_with_english_suffix():
    assert heuristics.extract_company_name("Invoice from Acme Corp. for services") == "Acme"


def test_company_name_falls_back_to_file_name():
    name = heuristics.extract_company_name("", "請求書_サンプル商事_2024-01-31.pdf")

    assert name == "サンプル商事"


def test_company_name_placeholder_when_nothing_found():
    assert heuristics.extract_company_name("", None) == "不明"


def test_amount_normalizes_full_width_characters():
    assert heuristics.extract_amount("合計金額：￥１２０，０００") == 120000


def test_amount_understands_man_yen_units():
    assert heuristics.extract_amount("お見積り 50万円") == 500000


def test_amount_reads_labelled_total_with_yen_sign():
    assert heuristics.extract_amount("合計：¥1,234,000円") == 1234000


def test_amount_scales_labelled_total_in_man_yen():
    assert heuristics.extract_amount("合計 1,500万円") == 15000000
    assert heuristics.extract_amount("¥2.5万") == 25000


def test_amount_ignores_digit_runs_too_long_to_represent():
    assert heuristics.extract_amount("1" * 400 + ".5万円") == 0
    assert heuristics.extract_amount("合計 " + "9" * 400) == 0


def test_amount_ignores_implausibly_small_values():
    assert heuristics.extract_amount("合計 500円") == 0


def test_amount_prefers_labelled_total():
    text = "単価 ¥5,000\n金額 2,500,000"

    assert heuristics.extract_amount(text) == 2500000


def test_services_empty_when_nothing_matches():
    assert heuristics.extract_services("") == []


def test_dates_are_deduplicated_in_order():
    text = "発行日 2024年1月31日 支払期限 2024/02/29"

    assert heuristics.extract_dates(text) == ["2024年1月31日", "2024/02/29"]


def test_contact_info_collects_emails_phones_and_urls():
    details = heuristics.extract_contact_info(
        "mail: sales@foo.co.jp tel 03-1234-5678 https://foo.example.com/contact"
    )

    assert details.emails == ["sales@foo.co.jp"]
    assert details.phones == ["03-1234-5678"]
    assert details.urls == ["https://foo.example.com/contact"]
    assert details.as_text() == "sales@foo.co.jp / 03-1234-5678 / https://foo.example.com/contact"


def test_extract_is_total_on_garbage():
    result = heuristics.extract("\x00\x01\xff%%")

    assert result.company_name == "不明"
    assert result.services == []
    assert result.total_amount == 0
    assert result.business_category == CATEGORY_OTHER
    assert result.dates == []
    assert result.contact_info.emails == []
    assert result.contact_info.phones == []
    assert result.contact_info.urls == []


def test_extract_on_empty_text_returns_defaults():
    result = heuristics.extract("")

    assert result.company_name == "不明"
    assert result.services == []
    assert result.total_amount == 0
    assert result.dates == []
    assert result.contact_info.emails == []
    assert result.contact_info.phones == []
    assert result.contact_info.urls == []
    assert result.business_category == CATEGORY_OTHER


def test_extract_survives_overlong_amounts():
    result = heuristics.extract("1" * 400 + ".5万円")

    assert result.total_amount == 0
    assert result.business_category == CATEGORY_OTHER
