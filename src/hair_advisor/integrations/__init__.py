"""External service integrations."""

from .advice_client import AdviceResult, AdviceClient, EdgeFunctionAdviceClient, create_advice_client

__all__ = ['AdviceResult', 'AdviceClient', 'EdgeFunctionAdviceClient', 'create_advice_client']
