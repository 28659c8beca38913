"""Thread-hosted integrator with a mailbox.

The worker owns one BodyIntegrator and is the only thread that ever touches
it. Requests are queued in an inbox and processed one at a time, each to
completion, so ticks cannot overlap and no lock around the body arrays is
needed. Responses land in an outbox queue and are optionally pushed to a
callback as well (called from the worker thread).
"""

import logging
import queue
import threading
from typing import Callable, Optional

from solar_sim.errors import ConfigurationError, MessageError
from solar_sim.io.messages import ErrorResponse, Request, Response
from solar_sim.physics.body_integrator import BodyIntegrator
from solar_sim.utils.config import IntegratorConfig

logger = logging.getLogger(__name__)

_STOP = object()


class IntegratorWorker:
    """Runs a BodyIntegrator on a dedicated background thread."""

    def __init__(
        self,
        config: Optional[IntegratorConfig] = None,
        on_message: Optional[Callable[[Response], None]] = None,
        name: str = "integrator-worker",
    ):
        self.integrator = BodyIntegrator(config)
        self.on_message = on_message
        self.name = name
        self._inbox: "queue.Queue" = queue.Queue()
        self._outbox: "queue.Queue" = queue.Queue()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "IntegratorWorker":
        if self.running:
            return self
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.info("Worker '%s' started", self.name)
        return self

    def stop(self, timeout: Optional[float] = 5.0):
        """Finish queued requests, then stop the thread."""
        if not self.running:
            return
        self._inbox.put(_STOP)
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning("Worker '%s' did not stop within %.1fs", self.name, timeout)
        else:
            logger.info("Worker '%s' stopped", self.name)
            self._thread = None

    def post(self, request: Request):
        """Queue a request; returns immediately."""
        if not self.running:
            raise RuntimeError(f"Worker '{self.name}' is not running")
        self._inbox.put(request)

    def get(self, timeout: Optional[float] = None) -> Optional[Response]:
        """Next response, or None if nothing arrives within ``timeout``.

        ``timeout=0`` polls without blocking.
        """
        try:
            if timeout == 0:
                return self._outbox.get_nowait()
            return self._outbox.get(timeout=timeout)
        except queue.Empty:
            return None

    def join(self):
        """Block until every queued request has been processed."""
        self._inbox.join()

    def __enter__(self) -> "IntegratorWorker":
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    def _run(self):
        while True:
            request = self._inbox.get()
            try:
                if request is _STOP:
                    return
                self._process(request)
            finally:
                self._inbox.task_done()

    def _process(self, request):
        try:
            response = self.integrator.handle(request)
        except (ConfigurationError, MessageError) as e:
            logger.error("Worker '%s' rejected %s: %s", self.name, type(request).__name__, e)
            response = ErrorResponse(error=str(e))
        except Exception as e:
            # keep the thread alive so later requests are still answered
            logger.exception("Worker '%s' failed on %s", self.name, type(request).__name__)
            response = ErrorResponse(error=f"{type(e).__name__}: {e}")
        if response is not None:
            self._emit(response)

    def _emit(self, response: Response):
        self._outbox.put(response)
        if self.on_message is None:
            return
        try:
            self.on_message(response)
        except Exception:
            logger.exception("Worker '%s' on_message callback raised", self.name)
