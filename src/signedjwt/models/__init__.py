from signedjwt.models.token import VerifiedToken

__all__ = ["VerifiedToken"]
