from validator_agent.repositories.connection_registry import ChainConnectionRegistry

__all__ = ['ChainConnectionRegistry']
