from __future__ import annotations

import time
from contextvars import ContextVar, Token
from dataclasses import dataclass, field

# Set per HTTP request by the API middleware; sync endpoints run on a copied context.
_request_id: ContextVar[str] = ContextVar("greenlink_request_id", default="")


def bind_request_id(rid: str) -> Token:
    return _request_id.set(rid or "")


def release_request_id(token: Token) -> None:
    _request_id.reset(token)


def current_request_id() -> str:
    return _request_id.get()


@dataclass
class Stopwatch:
    started: float = field(default_factory=time.perf_counter)

    def elapsed_ms(self) -> int:
        return int((time.perf_counter() - self.started) * 1000)
