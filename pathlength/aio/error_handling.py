"""Error handling wrapper for path adapters.

The engine never talks to an adapter directly. Every scan wraps its
adapter in an ErrorHandlingAdapter, which forwards each call and hands
failures to the scan's ErrorPolicy. Whether an unreadable directory ends
the scan is decided by the policy, so adapters stay free of error logic.
"""

import asyncio
import functools
from typing import Any, Optional

from .error_policies import ErrorPolicy, FailFastPolicy, ContinueOnErrorsPolicy


class ErrorHandlingAdapter:
    """Proxy that routes adapter failures through an ErrorPolicy.

    Attribute lookups fall through to the wrapped adapter. Callables come
    back wrapped: a synchronous failure goes to ``policy.handle_sync``,
    and a coroutine is awaited inside ``policy.handle`` so the policy can
    substitute a value (an empty listing) for the error.
    """

    def __init__(self, base_adapter: Any, policy: Optional[ErrorPolicy] = None):
        """
        Args:
            base_adapter: Adapter being wrapped, usually a FileSystemAdapter
            policy: Policy consulted on failure (FailFastPolicy if omitted)
        """
        self._base_adapter = base_adapter
        self._policy = policy or FailFastPolicy()

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._base_adapter, name)
        if not callable(attr):
            return attr

        @functools.wraps(attr)
        def guarded(*args, **kwargs):
            target = args[0] if args else None
            try:
                outcome = attr(*args, **kwargs)
            except Exception as e:
                return self._policy.handle_sync(e, name, target, *args, **kwargs)

            if asyncio.iscoroutine(outcome):
                return self._await_guarded(outcome, name, *args, **kwargs)
            return outcome

        return guarded

    async def _await_guarded(self, coro, method_name: str, *args, **kwargs) -> Any:
        """Await coro, letting the policy decide what a failure means."""
        try:
            return await coro
        except Exception as e:
            target = args[0] if args else None
            return await self._policy.handle(e, method_name, target, *args, **kwargs)

    def get_policy(self) -> ErrorPolicy:
        return self._policy

    def __repr__(self) -> str:
        return f"ErrorHandlingAdapter({self._base_adapter!r}, policy={type(self._policy).__name__})"


def create_resilient_adapter(base_adapter: Any, force: bool = False, verbose: bool = False) -> ErrorHandlingAdapter:
    """Wrap base_adapter with the policy matching the force option.

    Args:
        base_adapter: Adapter to wrap
        force: Skip directories that cannot be listed instead of failing
        verbose: Log skipped directories as warnings (force mode only)

    Returns:
        ErrorHandlingAdapter around base_adapter
    """
    policy = ContinueOnErrorsPolicy(verbose=verbose) if force else FailFastPolicy()
    return ErrorHandlingAdapter(base_adapter, policy)
