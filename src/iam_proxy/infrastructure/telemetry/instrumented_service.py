import time
from collections.abc import Iterator
from contextlib import contextmanager

from framework.telemetry import get_meter, get_tracer
from opentelemetry import metrics, trace

from iam_proxy.application.service import AuthServicer
from iam_proxy.domain.value_objects.health import Health
from iam_proxy.domain.value_objects.tokens import IssuedTokenPair

DURATION_METRIC = "iam_proxy.service.duration"


class InstrumentedAuthService(AuthServicer):
    """AuthServicer decorator recording a span and a duration histogram per operation"""

    def __init__(
        self,
        base: AuthServicer,
        instance_name: str,
        tracer: trace.Tracer | None = None,
        meter: metrics.Meter | None = None,
    ):
        self.base = base
        self.instance_name = instance_name
        self.tracer = tracer or get_tracer(__name__)
        meter = meter or get_meter(__name__)
        self.duration = meter.create_histogram(
            DURATION_METRIC,
            unit="ms",
            description="Time spent running an operation of the auth service",
        )

    @contextmanager
    def _observe(self, method_name: str) -> Iterator[trace.Span]:
        started = time.perf_counter()
        result = "ok"
        with self.tracer.start_as_current_span(f"AuthService.{method_name}") as span:
            span.set_attribute("iam_proxy.instance_name", self.instance_name)
            try:
                yield span
            except Exception:
                result = "error"
                raise
            finally:
                self.duration.record(
                    (time.perf_counter() - started) * 1000,
                    attributes={
                        "method_name": method_name,
                        "instance_name": self.instance_name,
                        "result": result,
                    },
                )

    async def verify_credentials(self, client_id: str, client_secret: str) -> IssuedTokenPair:
        with self._observe("verify_credentials") as span:
            span.set_attribute("iam_proxy.client_id", client_id)
            return await self.base.verify_credentials(client_id, client_secret)

    async def resolve_subject(self, token: str) -> str:
        with self._observe("resolve_subject"):
            return await self.base.resolve_subject(token)

    async def health(self) -> Health:
        with self._observe("health") as span:
            health = await self.base.health()
            span.set_attribute("iam_proxy.health", health.status.value)
            return health

    async def ready(self) -> None:
        with self._observe("ready"):
            await self.base.ready()
