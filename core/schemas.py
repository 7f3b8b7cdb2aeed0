"""
Response Schemas

This module defines Pydantic models for the payloads returned by the Intrinio API.

Key Principle:
    The client never invents business values. Every payload field is optional and
    defaults to None, so a field the service did not send is "absent", not zero or
    an empty string. Fields the service sends but we don't model are ignored, which
    keeps older clients working when Intrinio adds new fields.

Models:
    - CompanySummary / SecuritySummary / IndexSummary / OwnerSummary: master list rows
    - CompanyDetails / SecurityDetails / IndexDetails: single-entity lookups
    - SecurityScreenResult: securities search (screener) row
    - DataPoint: most recent value of a tag for an identifier
    - HistoricalData: dated value of a tag
    - Price: end-of-day stock price
    - CompanySecFiling: SEC filing metadata
    - StandardizedFundamental: available fiscal period of standardized statements
    - Page: paged envelope wrapping list endpoints
"""

import datetime as dt
from typing import Generic, List, Optional, TypeVar, Union
from pydantic import BaseModel, ConfigDict, Field


# ============================================
# Base Model
# ============================================

class IntrinioModel(BaseModel):
    """
    Base model for all response payloads.

    - Unknown fields are ignored (forward compatibility)
    - Instances are immutable once decoded
    """

    model_config = ConfigDict(extra="ignore", frozen=True)


# ============================================
# Master Data
# ============================================

class CompanySummary(IntrinioModel):
    """Row of the company master list."""

    ticker: Optional[str] = None
    name: Optional[str] = None
    lei: Optional[str] = None
    cik: Optional[str] = None
    latest_filing_date: Optional[dt.date] = None


class SecuritySummary(IntrinioModel):
    """Row of the security master list."""

    ticker: Optional[str] = None
    figi_ticker: Optional[str] = None
    figi: Optional[str] = None
    composite_figi: Optional[str] = None
    composite_figi_ticker: Optional[str] = None
    security_name: Optional[str] = None
    market_sector: Optional[str] = None
    security_type: Optional[str] = None
    stock_exchange: Optional[str] = None
    last_crsp_adj_date: Optional[dt.date] = None


class IndexSummary(IntrinioModel):
    """Row of the index master list."""

    symbol: Optional[str] = None
    index_name: Optional[str] = None
    index_type: Optional[str] = None


class OwnerSummary(IntrinioModel):
    """Row of the owner master list."""

    owner_cik: Optional[str] = None
    owner_name: Optional[str] = None


# ============================================
# Company / Security / Index Details
# ============================================

class CompanyDetails(IntrinioModel):
    """
    Company details.

    Example:
        >>> CompanyDetails.model_validate({"ticker": "AAPL", "name": "Apple Inc", "employees": 116000})
        CompanyDetails(ticker='AAPL', name='Apple Inc', ...)
    """

    ticker: Optional[str] = None
    name: Optional[str] = None
    lei: Optional[str] = None
    legal_name: Optional[str] = None
    cik: Optional[str] = None
    stock_exchange: Optional[str] = None
    sic: Optional[str] = None
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    ceo: Optional[str] = None
    company_url: Optional[str] = None
    business_address: Optional[str] = None
    mailing_address: Optional[str] = None
    business_phone_no: Optional[str] = None
    hq_address1: Optional[str] = None
    hq_address2: Optional[str] = None
    hq_address_city: Optional[str] = None
    hq_address_postal_code: Optional[str] = None
    entity_legal_form: Optional[str] = None
    hq_state: Optional[str] = None
    hq_country: Optional[str] = None
    inc_state: Optional[str] = None
    inc_country: Optional[str] = None
    employees: Optional[int] = None
    sector: Optional[str] = None
    industry_category: Optional[str] = None
    industry_group: Optional[str] = None
    template: Optional[str] = None
    standardized_active: Optional[bool] = None
    first_stock_price_date: Optional[dt.date] = None
    latest_filing_date: Optional[dt.date] = None


class SecurityDetails(IntrinioModel):
    """Security details."""

    ticker: Optional[str] = None
    figi_ticker: Optional[str] = None
    figi: Optional[str] = None
    composite_figi: Optional[str] = None
    composite_figi_ticker: Optional[str] = None
    figi_uniqueid: Optional[str] = None
    share_class_figi: Optional[str] = None
    security_name: Optional[str] = None
    market_sector: Optional[str] = None
    security_type: Optional[str] = None
    stock_exchange: Optional[str] = None
    primary_security: Optional[bool] = None
    primary_listing: Optional[bool] = None
    exchange_symbol: Optional[str] = None
    exchange_mic: Optional[str] = None
    currency: Optional[str] = None
    round_lot_size: Optional[int] = None
    etf: Optional[bool] = None
    delisted_security: Optional[bool] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    last_crsp_adj_date: Optional[dt.date] = None


class IndexDetails(IntrinioModel):
    """Index details."""

    symbol: Optional[str] = None
    index_name: Optional[str] = None
    continent: Optional[str] = None
    country: Optional[str] = None
    index_type: Optional[str] = None


# ============================================
# Search Results
# ============================================

class SecurityScreenResult(BaseModel):
    """
    Row of a securities search (screener) result.

    Each condition tag comes back as a top-level key named after the tag
    (e.g. "marketcap"), so extra keys are kept and exposed via `tag_values`.
    """

    ticker: Optional[str] = None
    figi_ticker: Optional[str] = None
    figi: Optional[str] = None
    security_name: Optional[str] = None

    model_config = ConfigDict(extra="allow", frozen=True)

    @property
    def tag_values(self) -> dict:
        return dict(self.model_extra or {})


class DataPoint(IntrinioModel):
    """
    Most recent value of one tag for one identifier.

    `value` is numeric for financial tags and a string for descriptive
    tags (e.g. "name"). The service reports "na" when no value exists.
    """

    identifier: Optional[str] = None
    item: Optional[str] = None
    value: Optional[Union[float, str]] = None


class HistoricalData(IntrinioModel):
    """
    Value of a tag as of a given date.

    Like DataPoint, `value` may be one of the service's "na"/"nm" strings.
    """

    date: Optional[dt.date] = Field(None, description="Date associated with the value of the data tag")
    value: Optional[Union[float, str]] = Field(None, description="Value of the tag on that date")


class Price(IntrinioModel):
    """
    End-of-day stock price.

    Example:
        >>> Price.model_validate({"date": "2020-01-02", "close": 300.35})
        Price(date=datetime.date(2020, 1, 2), open=None, ..., close=300.35, ...)
    """

    date: Optional[dt.date] = None
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    volume: Optional[float] = None
    ex_dividend: Optional[float] = None
    split_ratio: Optional[float] = None
    adj_open: Optional[float] = None
    adj_high: Optional[float] = None
    adj_low: Optional[float] = None
    adj_close: Optional[float] = None
    adj_volume: Optional[float] = None


class CompanySecFiling(IntrinioModel):
    """SEC filing metadata for a company."""

    filing_date: Optional[dt.date] = None
    accepted_date: Optional[str] = None
    period_ended: Optional[dt.date] = None
    accno: Optional[str] = None
    report_type: Optional[str] = None
    filing_url: Optional[str] = None
    report_url: Optional[str] = None
    instance_url: Optional[str] = None


class StandardizedFundamental(IntrinioModel):
    """Fiscal period for which standardized financial statements are available."""

    fiscal_year: Optional[int] = None
    fiscal_period: Optional[str] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None


# ============================================
# Paged Envelope
# ============================================

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """
    Paged envelope used by Intrinio list endpoints.

    Response Format:
        {
          "data": [ {...}, {...} ],
          "result_count": 2,
          "page_size": 100,
          "current_page": 1,
          "total_pages": 1,
          "api_call_credits": 1
        }

    `data` keeps the order the service returned.
    """

    data: List[T]
    result_count: Optional[int] = None
    page_size: Optional[int] = None
    current_page: Optional[int] = None
    total_pages: Optional[int] = None
    api_call_credits: Optional[int] = None

    model_config = ConfigDict(extra="ignore", frozen=True)
