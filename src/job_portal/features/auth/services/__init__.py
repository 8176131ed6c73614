from .token_verifier import TokenVerifier

__all__ = ["TokenVerifier"]
