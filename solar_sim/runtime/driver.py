"""Host-side frame driver.

Translates a render loop's variable frame time into tick requests:

- delta time is clamped to ``max_dt`` so one slow frame cannot inject a large,
  unstable step;
- at most one tick is in flight, across re-inits too; frames arriving
  before the previous result has been polled are dropped rather than queued;
- a result that belongs to an earlier init is discarded;
- results are applied to ``positions``/``velocities`` by body id, so a
  consumer never has to rely on ordering.
"""

import logging
from collections import deque
from typing import Callable, Dict, FrozenSet, List, Optional, Sequence

from solar_sim.errors import ConfigurationError, MessageError
from solar_sim.io.messages import ErrorResponse, InitRequest, Request, Response, TickRequest, UpdateResponse
from solar_sim.physics import constants
from solar_sim.physics.bodies import Attractor, Body
from solar_sim.physics.body_integrator import BodyIntegrator
from solar_sim.physics.vector import Vector3

logger = logging.getLogger(__name__)


class LocalChannel:
    """Synchronous in-process channel with the same post()/get() surface as IntegratorWorker."""

    def __init__(self, integrator: Optional[BodyIntegrator] = None):
        self.integrator = integrator or BodyIntegrator()
        self._responses = deque()

    def post(self, request: Request):
        try:
            response = self.integrator.handle(request)
        except (ConfigurationError, MessageError) as e:
            logger.error("Integrator rejected %s: %s", type(request).__name__, e)
            response = ErrorResponse(error=str(e))
        if response is not None:
            self._responses.append(response)

    def get(self, timeout: Optional[float] = None) -> Optional[Response]:
        return self._responses.popleft() if self._responses else None


class FrameDriver:
    """Feeds clamped ticks to an integrator channel and collects the results."""

    def __init__(
        self,
        channel,
        max_dt: float = constants.MAX_DT,
        on_update: Optional[Callable[[UpdateResponse], None]] = None,
    ):
        """Initialize driver.

        Args:
            channel: IntegratorWorker or LocalChannel
            max_dt: Largest dt passed to a single tick (seconds)
            on_update: Called with every UpdateResponse applied by poll()
        """
        if max_dt <= 0:
            raise ConfigurationError(f"max_dt must be positive, got {max_dt!r}")
        self.channel = channel
        self.max_dt = max_dt
        self.on_update = on_update

        self.positions: Dict[str, Vector3] = {}
        self.velocities: Dict[str, Vector3] = {}
        self.initialized = False
        self.tick_in_flight = False
        self.frames_dropped = 0
        self.updates_applied = 0
        self.last_error: Optional[str] = None
        self._ids: FrozenSet[str] = frozenset()
        self._stale_ticks = 0

    def initialize(self, bodies: Sequence[Body], sun: Attractor):
        """Send an init request and seed the local view with the initial state.

        A tick still in flight from the previous body set is left to finish;
        its result is discarded when it arrives.
        """
        if self.tick_in_flight:
            self._stale_ticks += 1
        self._ids = frozenset(b.id for b in bodies)
        self.positions = {b.id: b.position for b in bodies}
        self.velocities = {b.id: b.velocity for b in bodies}
        self.last_error = None
        self.initialized = True
        self.channel.post(InitRequest(bodies=list(bodies), sun=sun))

    def clamp(self, delta_time: float) -> float:
        return min(delta_time, self.max_dt)

    def on_frame(self, delta_time: float) -> bool:
        """Request a tick for this frame.

        Returns:
            True if a tick was posted, False if the frame was dropped
        """
        if not self.initialized:
            return False
        if self.tick_in_flight:
            self.frames_dropped += 1
            return False
        dt = float(self.clamp(delta_time))
        if not dt > 0:
            return False
        self.tick_in_flight = True
        self.channel.post(TickRequest(dt=dt))
        return True

    def poll(self, timeout: Optional[float] = 0) -> List[Response]:
        """Apply every response currently available.

        Args:
            timeout: How long to wait for the first response (0 = don't wait)
        """
        responses = []
        response = self.channel.get(timeout)
        while response is not None:
            self._apply(response)
            responses.append(response)
            response = self.channel.get(0)
        return responses

    def _apply(self, response: Response):
        if isinstance(response, UpdateResponse):
            self.tick_in_flight = False
            if self._stale_ticks > 0:
                self._stale_ticks -= 1
                logger.debug("Discarding update from a previous init")
                return
            if frozenset(update.id for update in response.bodies) != self._ids:
                logger.warning("Discarding update whose ids do not match the current bodies")
                return
            for update in response.bodies:
                self.positions[update.id] = update.position
                self.velocities[update.id] = update.velocity
            self.updates_applied += 1
            if self.on_update is not None:
                self.on_update(response)
        elif isinstance(response, ErrorResponse):
            logger.warning("Integrator reported an error: %s", response.error)
            self.last_error = response.error
            # ticks posted after a failed init are skipped and never answered
            self.tick_in_flight = False
            self._stale_ticks = 0
            self.initialized = False
