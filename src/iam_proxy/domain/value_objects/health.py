from dataclasses import dataclass
from enum import Enum


class HealthStatus(str, Enum):
    """Available statuses for the health of the service"""

    ALIVE = "Alive"
    DEGRADED = "Degraded"
    UNAVAILABLE = "Unavailable"


NO_CREDENTIALS_DETAIL = "No client credentials available"
INSECURE_SECRET_DETAIL = "insecure secret"


@dataclass(frozen=True)
class Health:
    """Health of the service, derived from its configuration on every query"""

    status: HealthStatus
    iam: str = ""

    def to_dict(self) -> dict[str, str]:
        result = {"status": self.status.value}
        if self.iam:
            result["iam"] = self.iam
        return result
