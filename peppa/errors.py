"""Exceptions raised by the bot decision core."""


class BotError(Exception):
    """Base exception for bot errors."""
    pass


class GameError(BotError):
    """Raised when the game input handed to a bot is unusable."""
    pass


class BotNotFoundError(GameError):
    """Raised when the acting player is not part of the game state."""
    pass


class StrategyInvariantError(BotError, AssertionError):
    """Raised when a local strategy produces a decision outside its contract."""
    pass


# === Oracle failures ===
# None of these leave RemoteDecisionClient; they all select the local fallback.

class OracleError(BotError):
    """Base exception for remote oracle failures."""
    pass


class OracleTimeout(OracleError):
    pass


class OracleTransportError(OracleError):
    pass


class OracleMalformedResponse(OracleError):
    pass


class OracleValidationFailure(OracleError):
    pass
