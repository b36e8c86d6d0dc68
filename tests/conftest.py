"""Shared test fixtures for the BtcTurk client.

The exchange-info document mirrors the shape of the live
``/api/v2/server/exchangeinfo`` payload: JSON numbers for prices, upper-case
order methods, and mixed-case operation-block tickers.
"""

from decimal import Decimal

import pytest

from btcturk import decimals
from btcturk.auth.keys import ApiKeys
from btcturk.auth.nonce import MonotonicNonce
from btcturk.config import ExchangeSettings
from btcturk.metadata.snapshot import MetadataSnapshot
from btcturk.metadata.store import MetadataStore
from btcturk.metadata.types import Symbol

PUBLIC_KEY = "63762e79-cb5c-4c0b-b714-5f0ce94bf100"
PRIVATE_KEY = "L2tW3CeHzXH16im1pIhofRw0GdlqCdb8"
FIXED_STAMP = 1_700_000_000_000

EXCHANGE_INFO_JSON = """
{
  "timeZone": "UTC",
  "serverTime": 1700000000123,
  "symbols": [
    {
      "id": 1,
      "name": "BTCTRY",
      "nameNormalized": "BTC_TRY",
      "status": "TRADING",
      "numerator": "BTC",
      "denominator": "TRY",
      "numeratorScale": 8,
      "denominatorScale": 2,
      "hasFraction": false,
      "filters": [
        {
          "filterType": "PRICE_FILTER",
          "minPrice": 0.0000000000001,
          "maxPrice": 10000000,
          "tickSize": 10,
          "minExchangeValue": 99.91,
          "minAmount": null,
          "maxAmount": null
        }
      ],
      "orderMethods": ["MARKET", "LIMIT", "STOP_MARKET", "STOP_LIMIT"],
      "displayFormat": "#,###",
      "commissionFromNumerator": false,
      "order": 1000,
      "priceRounding": false,
      "isNew": false,
      "marketPriceWarningThresholdPercentage": 0.25,
      "maximumOrderAmount": null,
      "maximumLimitOrderPrice": 12345670,
      "minimumLimitOrderPrice": 12345
    },
    {
      "id": 60,
      "name": "XTZBTC",
      "nameNormalized": "XTZ_BTC",
      "status": "TRADING",
      "numerator": "XTZ",
      "denominator": "BTC",
      "numeratorScale": 2,
      "denominatorScale": 7,
      "hasFraction": true,
      "filters": [
        {
          "filterType": "PRICE_FILTER",
          "minPrice": 0.0000001,
          "maxPrice": 1,
          "tickSize": 0.0000001,
          "minExchangeValue": 0.0001,
          "minAmount": 0.01,
          "maxAmount": 100000
        },
        {
          "filterType": "PERCENT_PRICE",
          "multiplierUp": 5,
          "multiplierDown": 0.2
        }
      ],
      "orderMethods": ["MARKET", "LIMIT", "TRAILING_STOP"],
      "displayFormat": "#,###.#######",
      "commissionFromNumerator": false,
      "order": 60,
      "priceRounding": false,
      "isNew": true,
      "marketPriceWarningThresholdPercentage": 0.25,
      "maximumOrderAmount": 5000
    },
    {
      "id": 2,
      "name": "ETHTRY",
      "nameNormalized": "ETH_TRY",
      "status": "HALTED",
      "numerator": "ETH",
      "denominator": "TRY",
      "numeratorScale": 8,
      "denominatorScale": 2,
      "hasFraction": true,
      "filters": [
        {
          "filterType": "PRICE_FILTER",
          "minPrice": 0.0000000000001,
          "maxPrice": 10000000,
          "tickSize": 1,
          "minExchangeValue": 99.91
        }
      ],
      "orderMethods": ["MARKET", "LIMIT"],
      "order": 1001
    },
    {
      "id": 4,
      "name": "SHIBTRY",
      "nameNormalized": "SHIB_TRY",
      "status": "TRADING",
      "numerator": "SHIB",
      "denominator": "TRY",
      "numeratorScale": 0,
      "denominatorScale": 8,
      "hasFraction": false,
      "filters": [
        {
          "filterType": "PRICE_FILTER",
          "minPrice": 0.00000001,
          "maxPrice": 1,
          "tickSize": 0.00000001,
          "minExchangeValue": 10
        }
      ],
      "orderMethods": ["MARKET", "LIMIT"],
      "order": 1100
    }
  ],
  "currencies": [
    {
      "id": 1,
      "symbol": "BTC",
      "minWithdrawal": 0.001,
      "minDeposit": 0.0001,
      "precision": 8,
      "address": {"minLen": 26, "maxLen": 90},
      "currencyType": "CRYPTO",
      "tag": {"enable": false, "name": null, "minLen": null, "maxLen": null},
      "color": "#F7931A",
      "name": "Bitcoin",
      "isAddressRenewable": false,
      "getAutoAddressDisabled": false,
      "isPartialWithdrawalEnabled": false,
      "isNew": false
    },
    {
      "id": 2,
      "symbol": "TRY",
      "minWithdrawal": 10,
      "minDeposit": 0,
      "precision": 2,
      "address": null,
      "currencyType": "FIAT",
      "tag": null,
      "name": "Turkish Lira"
    },
    {
      "id": 3,
      "symbol": "XRP",
      "minWithdrawal": 25,
      "minDeposit": 1,
      "precision": 6,
      "address": {"minLen": 25, "maxLen": 35},
      "currencyType": "crypto",
      "tag": {"enable": true, "name": "Destination Tag", "minLen": 1, "maxLen": 10},
      "name": "Ripple"
    },
    {
      "id": 4,
      "symbol": "ETH",
      "minWithdrawal": 0.01,
      "minDeposit": 0.001,
      "precision": 8,
      "currencyType": "CRYPTO",
      "name": "Ethereum"
    }
  ],
  "currencyOperationBlocks": [
    {"currencySymbol": "Btc", "withdrawalDisabled": false, "depositDisabled": true},
    {"currencySymbol": "Xrp", "withdrawalDisabled": true, "depositDisabled": false}
  ]
}
"""


def _make_symbol(**overrides) -> Symbol:
    """Build a TRADING symbol with a price filter, overriding any field."""
    price_filter = {
        "filterType": "PRICE_FILTER",
        "minPrice": Decimal("1"),
        "maxPrice": Decimal("1000"),
        "tickSize": Decimal("1"),
        "minExchangeValue": Decimal("50"),
    }
    price_filter.update(overrides.pop("price_filter", {}))
    data = {
        "id": 99,
        "name": "TSTTRY",
        "nameNormalized": "TST_TRY",
        "status": "TRADING",
        "numerator": "TST",
        "denominator": "TRY",
        "numeratorScale": 0,
        "denominatorScale": 2,
        "hasFraction": False,
        "filters": [price_filter],
        "orderMethods": ["MARKET", "LIMIT", "STOP_LIMIT", "STOP_MARKET"],
    }
    data.update(overrides)
    return Symbol.model_validate(data)


@pytest.fixture
def symbol_factory():
    """Factory for ad-hoc symbols: ``symbol_factory(numeratorScale=8, ...)``."""
    return _make_symbol


@pytest.fixture
def exchange_info_json() -> str:
    """Raw exchange-info document as JSON text."""
    return EXCHANGE_INFO_JSON


@pytest.fixture
def exchange_info(exchange_info_json: str) -> dict:
    """Exchange-info document decoded with Decimal numbers."""
    return decimals.loads(exchange_info_json)


@pytest.fixture
def store(exchange_info_json: str) -> MetadataStore:
    """MetadataStore loaded with the sample document."""
    store = MetadataStore()
    store.load(exchange_info_json)
    return store


@pytest.fixture
def snapshot(store: MetadataStore) -> MetadataSnapshot:
    return store.current()


@pytest.fixture
def btctry(snapshot: MetadataSnapshot) -> Symbol:
    """BTCTRY: tick 10, minExchangeValue 99.91, scales 8/2."""
    return snapshot.lookup_symbol("BTCTRY")


@pytest.fixture
def api_keys() -> ApiKeys:
    return ApiKeys(PUBLIC_KEY, PRIVATE_KEY)


@pytest.fixture
def fixed_nonce() -> MonotonicNonce:
    """Nonce source over a frozen clock: FIXED_STAMP, FIXED_STAMP + 1, ..."""
    return MonotonicNonce(clock_ms=lambda: FIXED_STAMP)


@pytest.fixture
def exchange_settings() -> ExchangeSettings:
    """Exchange settings with the sample key pair."""
    return ExchangeSettings(
        api_key=PUBLIC_KEY,  # type: ignore[arg-type]
        api_secret=PRIVATE_KEY,  # type: ignore[arg-type]
        base_url="https://api.btcturk.test",
    )
