"""User-data (bootstrap payload) support for IaaS providers."""

from contextlib import contextmanager
from typing import Callable, Iterator
import os
import tempfile

import httpx

from iaas_provisioner.domain.base.exceptions import ConfigKeyNotFoundError, ConfigurationError
from iaas_provisioner.domain.machine.exceptions import UserDataError
from iaas_provisioner.infrastructure.logging.logger import get_logger
from iaas_provisioner.providers.base.named_provider import NamedProvider

logger = get_logger(__name__)

DEFAULT_USER_DATA = """#!/bin/bash
curl -sL https://get.docker.com/ | sh
"""

USER_DATA_KEY = "user-data"
USER_DATA_FETCH_TIMEOUT = 30.0


def _default_http_client() -> httpx.Client:
    return httpx.Client(timeout=USER_DATA_FETCH_TIMEOUT, follow_redirects=True)


class UserDataProvider(NamedProvider):
    """Named provider that can deliver a bootstrap payload to new machines.

    The ``user-data`` setting selects the payload: absent means the built-in
    docker installation script, an empty string means no payload, an
    ``http(s)`` URL is fetched and anything else is read as a local file.
    """

    http_client_factory: Callable[[], httpx.Client] = staticmethod(_default_http_client)

    def read_user_data(self) -> str:
        try:
            source = self.get_config_string(USER_DATA_KEY)
        except ConfigKeyNotFoundError:
            return DEFAULT_USER_DATA
        if not source:
            return ""
        if source.startswith(("http://", "https://")):
            return self._fetch_user_data(source)
        with open(source, "r", encoding="utf-8") as f:
            return f.read()

    def _fetch_user_data(self, url: str) -> str:
        with self.http_client_factory() as client:
            response = client.get(url)
        if response.status_code != 200:
            raise httpx.HTTPStatusError(
                f"Invalid user-data status code: {response.status_code}",
                request=response.request,
                response=response,
            )
        return response.text


@contextmanager
def pending_user_data(provider: UserDataProvider) -> Iterator[str]:
    """
    Render the provider's user-data into a temporary file.

    Yields the file path. The file is removed when the block exits, whatever
    the outcome.

    Raises:
        UserDataError: If the file cannot be created or written, or the
            payload cannot be read
    """
    try:
        fd, path = tempfile.mkstemp(prefix="userdata-")
    except OSError as e:
        raise UserDataError("failed to create userdata file", e) from e
    try:
        with os.fdopen(fd, "w") as f:
            try:
                user_data = provider.read_user_data()
            except (httpx.HTTPError, OSError, ValueError, ConfigurationError) as e:
                raise UserDataError("failed to read userdata", e) from e
            try:
                f.write(user_data)
                f.flush()
            except OSError as e:
                raise UserDataError("failed to write local userdata file", e) from e
        yield path
    finally:
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.warning(f"User-data file {path} was already removed")
