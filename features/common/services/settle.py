import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, List, Mapping, Optional

@dataclass(frozen=True)
class FetchOutcome:
    """Result of one concurrent fetch: either a value or the error it raised."""
    source: str
    value: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

async def settle_all(fetches: Mapping[str, Awaitable[Any]]) -> List[FetchOutcome]:
    """Run every fetch concurrently and wait for all of them to finish.

    A failing fetch never cancels the others. Outcomes come back in the same
    order as ``fetches``. Cancellation is not captured and propagates.
    """
    sources = list(fetches.keys())
    results = await asyncio.gather(*fetches.values(), return_exceptions=True)

    outcomes: List[FetchOutcome] = []
    for source, result in zip(sources, results):
        if isinstance(result, Exception):
            outcomes.append(FetchOutcome(source=source, error=result))
        elif isinstance(result, BaseException):
            raise result
        else:
            outcomes.append(FetchOutcome(source=source, value=result))
    return outcomes
