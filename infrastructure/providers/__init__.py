from .base import ConversionProvider
from .coinmarketcap import CoinMarketCapProvider

__all__ = ['ConversionProvider', 'CoinMarketCapProvider']
