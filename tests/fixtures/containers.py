"""Container fixtures for Redis-compatible servers using testcontainers."""

from collections.abc import Generator
from contextlib import suppress
from typing import NamedTuple

import docker
import pytest
from testcontainers.core.container import DockerContainer
from testcontainers.core.waiting_utils import wait_for_logs

# Format: (image, client_library) where client_library is "redis" or "valkey"
REDIS_IMAGES = [
    ("redis:latest", "redis"),
    ("valkey/valkey:latest", "valkey"),
]

BACKENDS = {
    "redis": "django_scanx.client.RedisScanClient",
    "valkey": "django_scanx.client.ValkeyScanClient",
}


class RedisContainerInfo(NamedTuple):
    host: str
    port: int
    client_library: str
    container: DockerContainer

    @property
    def url(self) -> str:
        return f"redis://{self.host}:{self.port}/0"

    @property
    def backend(self) -> str:
        return BACKENDS[self.client_library]


def _docker_available() -> bool:
    try:
        docker.from_env().ping()
    except Exception:  # noqa: BLE001
        return False
    return True


def _start_redis_container(image: str, client_library: str) -> RedisContainerInfo:
    container = DockerContainer(image)
    container.with_exposed_ports(6379)
    container.start()
    wait_for_logs(container, "Ready to accept connections")
    return RedisContainerInfo(
        host=container.get_container_host_ip(),
        port=int(container.get_exposed_port(6379)),
        client_library=client_library,
        container=container,
    )


@pytest.fixture(scope="session", params=REDIS_IMAGES, ids=lambda x: f"{x[0].split('/')[0]}-{x[1]}")
def redis_images(request) -> tuple[str, str]:
    """Parametrized Redis image fixture."""
    return request.param


@pytest.fixture(scope="session")
def redis_container(redis_images: tuple[str, str]) -> Generator[RedisContainerInfo]:
    """Start one server per image for the session; skipped when Docker is unavailable."""
    if not _docker_available():
        pytest.skip("Docker is not available")
    info = _start_redis_container(*redis_images)
    yield info
    with suppress(Exception):
        info.container.stop()
