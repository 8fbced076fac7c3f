"""Client signature classifier using the user-agents library.

Implements ClientSignatureClassifierProtocol for the device risk signal.
Pure string parsing (<1ms), fail-open: an unparseable signature is treated
as not automated.
"""

from user_agents import parse as parse_user_agent  # type: ignore[import-untyped]

from vigil.domain.protocols import LoggerProtocol

# Scripted HTTP clients that user-agents does not flag as bots
_SCRIPT_CLIENT_MARKERS = (
    "curl/",
    "wget/",
    "python-requests/",
    "python-httpx/",
    "aiohttp/",
    "go-http-client/",
    "okhttp/",
    "java/",
    "headlesschrome",
    "phantomjs",
)


class UserAgentClassifier:
    """Bot/script detection from User-Agent strings."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    def is_automated(self, user_agent: str) -> bool:
        """Whether the signature identifies a bot, crawler or scripted client.

        Example:
            >>> classifier.is_automated("Googlebot/2.1 (+http://www.google.com/bot.html)")
            True
            >>> classifier.is_automated(
            ...     "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
            ...     "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.1 Safari/605.1.15"
            ... )
            False
        """
        if not user_agent:
            return False

        lowered = user_agent.lower()
        if any(marker in lowered for marker in _SCRIPT_CLIENT_MARKERS):
            return True

        try:
            return bool(parse_user_agent(user_agent).is_bot)
        except (ValueError, TypeError, AttributeError) as e:
            self._logger.warning(
                "user_agent_parse_failed", user_agent=user_agent[:100], error=str(e)
            )
            return False
