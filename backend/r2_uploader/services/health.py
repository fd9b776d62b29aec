from datetime import datetime, timezone

from r2_uploader.core.config import Settings
from r2_uploader.schemas import EnvironmentPresence, HealthResponse

# Only presence is reported, never values.
TRACKED_SETTINGS: tuple[str, ...] = (
    "r2_endpoint",
    "aws_access_key_id",
    "aws_secret_access_key",
    "r2_bucket",
    "r2_public_url",
)


def environment_presence(settings: Settings) -> EnvironmentPresence:
    return EnvironmentPresence(
        **{
            name: "present" if getattr(settings, name) else "missing"
            for name in TRACKED_SETTINGS
        }
    )


def build_health_report(settings: Settings) -> HealthResponse:
    return HealthResponse(
        timestamp=datetime.now(timezone.utc),
        environment=environment_presence(settings),
    )
