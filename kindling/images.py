"""Making sure the node images a cluster needs are present locally."""

from __future__ import annotations

import time

from kindling import dockercli
from kindling.common import required_node_images
from kindling.config import Cluster
from kindling.dockercli import CommandError
from kindling.log import Logger, NoopLogger
from kindling.status import Status


def ensure_node_images(status: Status, cfg: Cluster, logger: Logger | None = None) -> None:
    """Pull every node image of cfg that is not present, reporting on status.

    Pull failures are ignored: running the container pulls again anyway.
    """
    log = logger if logger is not None else NoopLogger()
    for image in sorted(required_node_images(cfg)):
        image = image.split("@sha256:")[0]
        status.start(f"Ensuring node image ({image}) 🖼")
        try:
            pull_if_not_present(image, 4, log)
        except CommandError:
            pass


def pull_if_not_present(image: str, retries: int, logger: Logger | None = None) -> bool:
    """Pull image unless it exists locally; return whether a pull was attempted.

    Raises CommandError when the pull fails after all retries.
    """
    log = logger if logger is not None else NoopLogger()
    try:
        dockercli.run(["docker", "inspect", "--type=image", image])
    except CommandError:
        pull(image, retries, log)
        return True
    log.v(1).infof("Image: %s present locally", image)
    return False


def pull(image: str, retries: int, logger: Logger | None = None) -> None:
    """Pull image, retrying up to retries times with a growing pause.

    Raises the last CommandError when every attempt fails.
    """
    log = logger if logger is not None else NoopLogger()
    log.v(1).infof("Pulling image: %s ...", image)
    try:
        dockercli.run(["docker", "pull", image])
        return
    except CommandError as exc:
        error = exc
    for attempt in range(retries):
        time.sleep(attempt + 1)
        log.v(1).infof("Trying again to pull image: %r ... %s", image, error)
        try:
            dockercli.run(["docker", "pull", image])
            return
        except CommandError as exc:
            error = exc
    log.v(1).infof("Failed to pull image: %r %s", image, error)
    raise error