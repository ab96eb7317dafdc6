import logging
from datetime import date

from covid_gdp.domain.models import JoinedRecord
from covid_gdp.services.export_service import joined_to_csv
from covid_gdp.utils.logging_redaction import RedactingFilter, redact_message


def test_csv_export_writes_header_and_blank_absent_growth():
    rows = [
        JoinedRecord(date(2020, 1, 1), new_cases=10, cumulative_confirmed=10, cumulative_deaths=0),
        JoinedRecord(date(2020, 1, 2), new_cases=5, cumulative_confirmed=15, cumulative_deaths=1, gdp_growth_percent=-2.5),
    ]

    lines = joined_to_csv(rows).strip().splitlines()

    assert lines[0] == "date,new_cases,cumulative_confirmed,cumulative_deaths,gdp_growth_percent"
    assert lines[1] == "2020-01-01,10,10,0,"
    assert lines[2] == "2020-01-02,5,15,1,-2.5"


def test_csv_export_of_empty_series_is_header_only():
    assert joined_to_csv([]).strip() == "date,new_cases,cumulative_confirmed,cumulative_deaths,gdp_growth_percent"


def test_tradingeconomics_key_is_redacted_from_urls():
    message = "GET https://api.tradingeconomics.com/historical/country/italy/indicator/gdp?c=abc123:xyz&f=json"
    redacted = redact_message(message)

    assert "abc123" not in redacted
    assert "c=[REDACTED]&f=json" in redacted


def test_redacting_filter_rewrites_record():
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "api_key=%s", ("secret-value",), None)

    assert RedactingFilter().filter(record) is True
    assert "secret-value" not in record.getMessage()
