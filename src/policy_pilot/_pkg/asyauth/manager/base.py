import contextlib
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field

import aiohttp


@dataclass(slots=True)
class BaseManager:
    _sess: aiohttp.ClientSession | None = field(init=False, default=None)

    def configure(self, sess: aiohttp.ClientSession) -> None:
        self._sess = sess

    @contextlib.asynccontextmanager
    async def new_session(self) -> AsyncGenerator[aiohttp.ClientSession, None]:
        assert self._sess, "The manager isn't configured but session is requested"
        yield self._sess
