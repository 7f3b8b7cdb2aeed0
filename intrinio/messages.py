"""
Request Descriptors

One frozen Pydantic model per Intrinio endpoint. A descriptor holds the parameters
of a single call; the attribute names are Python-friendly and each field's `alias`
is the parameter name sent on the wire.

Rules shared by all descriptors:
- Instances are immutable, so nothing changes between construction and dispatch
- Required parameters are enforced at construction (pydantic.ValidationError),
  i.e. before any network call
- Optional parameters default to None and are left out of the request entirely
- List parameters are stored as tuples and sent as one comma-delimited value,
  unless the field is marked with `json_schema_extra={"repeat": True}`

Example:
    >>> GetStandardizedFundamentals(
    ...     identifier="AAPL",
    ...     statement=FinancialStatement.INCOME_STATEMENT,
    ...     period_type=PeriodType.FY,
    ...     as_of_date=date(2017, 1, 31),
    ... )
    # encodes to identifier=AAPL&statement=income_statement&type=FY&date=2017-01-31
"""

import datetime as dt
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field


# ============================================
# Enumerated Tags
# ============================================

class SearchOperator(str, Enum):
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    EQ = "eq"
    CONTAINS = "contains"


class FinancialStatement(str, Enum):
    INCOME_STATEMENT = "income_statement"
    BALANCE_SHEET = "balance_sheet"
    CASH_FLOW_STATEMENT = "cash_flow_statement"
    CALCULATIONS = "calculations"


class PeriodType(str, Enum):
    """Fiscal years, quarters, trailing twelve months, year to date."""

    FY = "FY"
    QTR = "QTR"
    TTM = "TTM"
    YTD = "YTD"


class Frequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class OwnerType(str, Enum):
    INSTITUTIONAL = "institutional"
    INDIVIDUAL = "individual"


class IndexType(str, Enum):
    STOCK_MARKET = "stock_market"
    ECONOMIC = "economic"
    SIC = "sic"


# ============================================
# Base Descriptor
# ============================================

class IntrinioRequest(BaseModel):
    """
    Base class for all request descriptors.

    - frozen: fields cannot be reassigned after construction
    - extra="forbid": misspelled parameters fail at construction
    - populate_by_name: accept both the attribute name and the wire alias
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True
    )


# ============================================
# Master Data Feed
# ============================================

class GetCompaniesMasterList(IntrinioRequest):
    """http://docs.intrinio.com/#company-master"""

    query: Optional[str] = Field(None, description="Search string matched against company name or ticker")
    latest_filing_date: Optional[dt.date] = Field(None, description="Only companies that filed on or after this date")
    page_size: Optional[int] = Field(None, ge=1)
    page_number: Optional[int] = Field(None, ge=1)


class GetSecuritiesMasterList(IntrinioRequest):
    """
    http://docs.intrinio.com/#security-master

    The service answers an explicitly empty parameter with a server error, so
    unset parameters must stay unset (None), never "".
    """

    identifier: Optional[str] = None
    query: Optional[str] = None
    exch_symbol: Optional[str] = None
    us_only: Optional[bool] = None
    page_size: Optional[int] = Field(None, ge=1)
    page_number: Optional[int] = Field(None, ge=1)


class GetIndicesMasterList(IntrinioRequest):
    """http://docs.intrinio.com/#index-master"""

    query: Optional[str] = None
    index_type: Optional[IndexType] = Field(None, alias="type")
    page_size: Optional[int] = Field(None, ge=1)
    page_number: Optional[int] = Field(None, ge=1)


class GetOwnersMasterList(IntrinioRequest):
    """http://docs.intrinio.com/#owner-master"""

    query: Optional[str] = None
    owner_type: Optional[OwnerType] = Field(None, alias="type")
    page_size: Optional[int] = Field(None, ge=1)
    page_number: Optional[int] = Field(None, ge=1)


# ============================================
# U.S. Public Company Data Feed
# ============================================

class GetCompanyDetails(IntrinioRequest):
    """http://docs.intrinio.com/#companies"""

    identifier: str = Field(..., min_length=1, description="Ticker symbol or CIK")


class GetSecurityDetails(IntrinioRequest):
    """http://docs.intrinio.com/#securities"""

    identifier: str = Field(..., min_length=1, description="Ticker symbol or FIGI")


class GetIndexDetails(IntrinioRequest):
    """http://docs.intrinio.com/#indices47"""

    identifier: str = Field(..., min_length=1, description="Index symbol, e.g. $SPX")


class SecuritiesSearchCondition(BaseModel):
    """
    One screener condition, sent as a single `tag~operator~value` token.

    Example:
        >>> SecuritiesSearchCondition(tag="marketcap", operator=SearchOperator.GT, value=1e9)
        # -> "marketcap~gt~1000000000.0"
    """

    token_separator: ClassVar[str] = "~"

    tag: str = Field(..., min_length=1)
    operator: SearchOperator
    value: Union[int, float, str]

    model_config = ConfigDict(frozen=True, extra="forbid")


class SearchSecurities(IntrinioRequest):
    """
    http://docs.intrinio.com/#securities-search-screener

    The API call credits required for each call equal the number of conditions.
    """

    conditions: Tuple[SecuritiesSearchCondition, ...] = Field(..., min_length=1)
    logic: Optional[str] = Field(None, description="Boolean logic over condition indices, e.g. 'AND(0,1)'")
    order_column: Optional[str] = None
    order_direction: Optional[SortOrder] = None
    primary_only: Optional[bool] = None
    page_size: Optional[int] = Field(None, ge=1)
    page_number: Optional[int] = Field(None, ge=1)


class SearchDataPoints(IntrinioRequest):
    """
    http://docs.intrinio.com/#data-point

    Returns the most recent value for every identifier x tag combination.
    """

    identifiers: Tuple[str, ...] = Field(..., min_length=1, alias="identifier")
    tags: Tuple[str, ...] = Field(..., min_length=1, alias="item")


class SearchHistoricalData(IntrinioRequest):
    """http://docs.intrinio.com/#historical-data"""

    identifier: str = Field(..., min_length=1)
    tag: str = Field(..., min_length=1, alias="item")
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    frequency: Optional[Frequency] = None
    period_type: Optional[PeriodType] = Field(None, alias="type")
    sort_order: Optional[SortOrder] = None
    page_size: Optional[int] = Field(None, ge=1)
    page_number: Optional[int] = Field(None, ge=1)


class GetPrices(IntrinioRequest):
    """http://docs.intrinio.com/#prices"""

    identifier: str = Field(..., min_length=1)


class GetCompanySecFilings(IntrinioRequest):
    """http://docs.intrinio.com/#sec-filings"""

    identifier: str = Field(..., min_length=1)
    report_type: Optional[str] = Field(None, description="10-K | 10-Q | 8-K | 4 | etc")


class GetStandardizedFundamentals(IntrinioRequest):
    """
    http://docs.intrinio.com/#fundamentals-standardized

    `as_of_date` is a real date; it goes on the wire as `date=YYYY-MM-DD`.
    When omitted the service uses today.
    """

    identifier: str = Field(..., min_length=1)
    statement: FinancialStatement
    period_type: Optional[PeriodType] = Field(None, alias="type")
    as_of_date: Optional[dt.date] = Field(None, alias="date")
