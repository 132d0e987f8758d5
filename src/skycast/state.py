# ABOUTME: Application state holders: the selected city cell and the current-conditions store.
# ABOUTME: Both are explicitly constructed, written through one setter, and drop stale responses.

import asyncio
import contextlib
import logging
from collections.abc import Callable

import httpx

from skycast.config import Settings
from skycast.errors import SkycastError, describe_http_error
from skycast.interpreters import round_half_up
from skycast.models import AirQualityResponse, CurrentConditions, ResolvedCity, WeatherResponse
from skycast.weather_service import get_current_conditions, resolve_city

logger = logging.getLogger(__name__)

CityListener = Callable[[ResolvedCity | None], None]

LOAD_FAILED_MESSAGE = "Failed to load weather data"


class SelectedCityState:
    """The city the user is looking at.

    Starts unset. start() loads the configured default city in the background,
    trying the fallback city once if that fails and staying unset if both fail.
    A user search always replaces the value; a response that arrives after a
    newer request was issued is dropped instead of overwriting it.
    """

    def __init__(self, client: httpx.AsyncClient, settings: Settings | None = None):
        self._client = client
        self._settings = settings or Settings()
        self._city: ResolvedCity | None = None
        # bumped by every search and set_city(); decides which search result is current
        self._generation = 0
        # bumped only when the cell is actually written
        self._writes = 0
        self._listeners: list[CityListener] = []
        self._init_task: asyncio.Task | None = None

    @property
    def city(self) -> ResolvedCity | None:
        return self._city

    def subscribe(self, listener: CityListener) -> Callable[[], None]:
        """Call `listener` with the new value on every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_city(self, city: ResolvedCity | None) -> None:
        """Replace the selected city and supersede any request still in flight.

        Listeners run synchronously. Outside a running event loop the conditions
        store defers its fetch until it is next read.
        """
        self._generation += 1
        self._write(city)

    def _write(self, city: ResolvedCity | None) -> None:
        self._writes += 1
        self._city = city
        for listener in list(self._listeners):
            listener(city)

    def start(self) -> asyncio.Task:
        """Schedule the default-city load on the running loop (idempotent)."""
        if self._init_task is None:
            self._init_task = asyncio.create_task(self.initialize())
        return self._init_task

    async def initialize(self) -> ResolvedCity | None:
        """Resolve the default city, then the fallback city once. Never raises on lookup failure.

        Only a completed selection supersedes this load; a search that fails leaves it in place.
        """
        writes = self._writes
        for name in (self._settings.default_city, self._settings.fallback_city):
            if writes != self._writes:
                return None
            try:
                city = await resolve_city(self._client, name)
            except (httpx.HTTPError, SkycastError):
                logger.warning("Could not load startup city %r", name, exc_info=True)
                continue
            if writes != self._writes:
                logger.info("Startup city %s discarded, a newer selection was made", city.display_name)
                return None
            # a search still in flight stays current and overwrites this when it lands
            self._write(city)
            return city
        logger.error(
            "Neither %r nor %r could be resolved; no city selected",
            self._settings.default_city,
            self._settings.fallback_city,
        )
        return None

    async def search(self, term: str) -> ResolvedCity | None:
        """Resolve `term` and select the result.

        Returns None when another search or selection was issued while this one
        was in flight. Raises CityNotFoundError when nothing matches.
        """
        self._generation += 1
        generation = self._generation
        city = await resolve_city(self._client, term)
        if generation != self._generation:
            logger.info("Dropping stale result for %r", term)
            return None
        self.set_city(city)
        return city

    async def aclose(self) -> None:
        task, self._init_task = self._init_task, None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task


class ConditionsState:
    """Current weather and air quality for the selected city, refetched whenever it changes."""

    def __init__(self, client: httpx.AsyncClient, selected: SelectedCityState):
        self._client = client
        self._city: ResolvedCity | None = None
        self._conditions: CurrentConditions | None = None
        self._is_loading = False
        self._error = ""
        self._generation = 0
        self._tasks: set[asyncio.Task] = set()
        self._unsubscribe = selected.subscribe(self._on_city_changed)

    @property
    def city(self) -> ResolvedCity | None:
        """City the held conditions (or the pending request) belong to."""
        return self._city

    @property
    def conditions(self) -> CurrentConditions | None:
        return self._conditions

    @property
    def weather(self) -> WeatherResponse | None:
        return self._conditions.weather if self._conditions else None

    @property
    def air_quality(self) -> AirQualityResponse | None:
        return self._conditions.air_quality if self._conditions else None

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error(self) -> str:
        return self._error

    @property
    def has_error(self) -> bool:
        return self._error != ""

    @property
    def has_data(self) -> bool:
        return self._conditions is not None

    @property
    def is_ready(self) -> bool:
        return not self._is_loading and not self.has_error

    @property
    def current_temperature(self) -> int | None:
        current = self.weather.current if self.weather else None
        if current is None or current.temperature_2m is None:
            return None
        return round_half_up(current.temperature_2m)

    @property
    def weather_code(self) -> int | None:
        current = self.weather.current if self.weather else None
        return current.weather_code if current else None

    @property
    def is_day(self) -> bool:
        current = self.weather.current if self.weather else None
        return current is not None and current.is_day == 1

    def _on_city_changed(self, city: ResolvedCity | None) -> None:
        if city is None:
            self.clear()
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # no loop to fetch on; conditions_for() loads the city on first read
            self.clear()
            self._city = city
            return
        self._is_loading = True
        task = asyncio.create_task(self.refresh(city))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def refresh(self, city: ResolvedCity) -> CurrentConditions | None:
        """Fetch conditions for `city`. Returns None on failure or when superseded by a newer refresh."""
        self._generation += 1
        generation = self._generation
        self._city = city
        self._is_loading = True
        self._error = ""
        try:
            conditions = await get_current_conditions(self._client, city.latitude, city.longitude)
        except httpx.HTTPError as e:
            self._fail(generation, describe_http_error(e).message)
            return None
        except SkycastError:
            logger.exception("Unusable weather data for %s", city.display_name)
            self._fail(generation, LOAD_FAILED_MESSAGE)
            return None
        if generation != self._generation:
            return None
        self._conditions = conditions
        self._is_loading = False
        return conditions

    async def conditions_for(self, city: ResolvedCity) -> CurrentConditions | None:
        """Conditions belonging to `city`, fetching them unless they are already held.

        Returns None when the fetch fails or a refresh for another request
        superseded it, so callers never pair `city` with someone else's readings.
        """
        if self._city == city and self.is_ready and self._conditions is not None:
            return self._conditions
        return await self.refresh(city)

    def _fail(self, generation: int, message: str) -> None:
        if generation != self._generation:
            return
        self._conditions = None
        self._error = message
        self._is_loading = False

    def clear(self) -> None:
        self._generation += 1
        self._city = None
        self._conditions = None
        self._is_loading = False
        self._error = ""

    async def aclose(self) -> None:
        self._unsubscribe()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
