"""
Intrinio Client

One method per catalog operation, on top of the generic IntrinioAPIClient
dispatcher. Every method accepts either a ready-made request descriptor or the
descriptor's fields as keyword arguments:

    async with IntrinioClient.from_settings() as client:
        await client.get_prices(GetPrices(identifier="AAPL"))
        await client.get_prices(identifier="AAPL")

Keyword arguments that do not form a valid descriptor (missing required field,
unknown parameter, wrong type) come back as an INVALID_REQUEST ApiError and no
request is sent.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError

from intrinio.api_client import IntrinioAPIClient
from intrinio.catalog import get_binding
from intrinio.errors import ApiResult, translate_invalid_request
from intrinio.messages import (
    GetCompaniesMasterList,
    GetCompanyDetails,
    GetCompanySecFilings,
    GetIndexDetails,
    GetIndicesMasterList,
    GetOwnersMasterList,
    GetPrices,
    GetSecuritiesMasterList,
    GetSecurityDetails,
    GetStandardizedFundamentals,
    SearchDataPoints,
    SearchHistoricalData,
    SearchSecurities,
)


class IntrinioClient(IntrinioAPIClient):
    """
    Typed Intrinio client

    All methods return an ApiResult:
        - Master lists, searches, data points, historical data -> Page of models
        - Company / security / index details, prices           -> single model
        - SEC filings, standardized fundamentals               -> list of models
    """

    async def _invoke(self, operation: str, request: Optional[BaseModel], params: Dict[str, Any]) -> ApiResult:
        binding = get_binding(operation)

        if request is not None and params:
            return ApiResult(error=translate_invalid_request(TypeError(
                "Pass either a request descriptor or keyword parameters, not both"
            )))

        if request is None:
            try:
                request = binding.request_type(**params)
            except ValidationError as e:
                self.logger.warning(f"Invalid parameters for {operation}: {e.error_count()} error(s)")
                return ApiResult(error=translate_invalid_request(e))

        self.logger.info(f"Calling {operation} ({binding.method.value} {binding.path})")
        return await self.dispatch(binding, request)

    # ============================================
    # Master Data Feed
    # ============================================

    async def get_companies_master_list(self, request: Optional[GetCompaniesMasterList] = None, **params) -> ApiResult:
        """http://docs.intrinio.com/#company-master"""
        return await self._invoke("companies_master_list", request, params)

    async def get_securities_master_list(self, request: Optional[GetSecuritiesMasterList] = None, **params) -> ApiResult:
        """http://docs.intrinio.com/#security-master"""
        return await self._invoke("securities_master_list", request, params)

    async def get_indices_master_list(self, request: Optional[GetIndicesMasterList] = None, **params) -> ApiResult:
        """http://docs.intrinio.com/#index-master"""
        return await self._invoke("indices_master_list", request, params)

    async def get_owners_master_list(self, request: Optional[GetOwnersMasterList] = None, **params) -> ApiResult:
        """http://docs.intrinio.com/#owner-master"""
        return await self._invoke("owners_master_list", request, params)

    # ============================================
    # U.S. Public Company Data Feed
    # ============================================

    async def get_company_details(self, request: Optional[GetCompanyDetails] = None, **params) -> ApiResult:
        """Company information for one identifier (ticker or CIK)."""
        return await self._invoke("company_details", request, params)

    async def get_security_details(self, request: Optional[GetSecurityDetails] = None, **params) -> ApiResult:
        """Security information for one identifier."""
        return await self._invoke("security_details", request, params)

    async def get_index_details(self, request: Optional[GetIndexDetails] = None, **params) -> ApiResult:
        """Index information for one index symbol."""
        return await self._invoke("index_details", request, params)

    async def search_securities(self, request: Optional[SearchSecurities] = None, **params) -> ApiResult:
        """
        Securities matching all given screener conditions.

        Each condition costs one API call credit.

        Example:
            >>> await client.search_securities(
            ...     conditions=[SecuritiesSearchCondition(tag="marketcap", operator="gt", value=1e9)],
            ...     page_size=10,
            ... )
        """
        return await self._invoke("securities_search", request, params)

    async def search_data_points(self, request: Optional[SearchDataPoints] = None, **params) -> ApiResult:
        """
        Most recent value for every identifier x tag pair.

        Income statement, cash flow statement and ratios are returned as trailing
        twelve months values; everything else as its most recent reported value.
        """
        return await self._invoke("data_point", request, params)

    async def search_historical_data(self, request: Optional[SearchHistoricalData] = None, **params) -> ApiResult:
        """Dated history of one tag for one identifier."""
        return await self._invoke("historical_data", request, params)

    async def get_prices(self, request: Optional[GetPrices] = None, **params) -> ApiResult:
        """Current end-of-day price for one identifier."""
        return await self._invoke("prices", request, params)

    async def get_company_sec_filings(self, request: Optional[GetCompanySecFilings] = None, **params) -> ApiResult:
        """SEC filings of one company, optionally filtered by report type."""
        return await self._invoke("company_sec_filings", request, params)

    async def get_standardized_fundamentals(self, request: Optional[GetStandardizedFundamentals] = None, **params) -> ApiResult:
        """Fiscal periods with standardized statements available, latest first."""
        return await self._invoke("standardized_fundamentals", request, params)
