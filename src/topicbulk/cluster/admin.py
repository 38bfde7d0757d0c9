#!/usr/bin/env python3
"""
TOPICBULK CLUSTER ADMIN
-----------------------
Thin façade over the confluent-kafka AdminClient exposing the two calls a
reconciliation run makes: the existing-topic snapshot and single-topic
creation. Every call blocks, bounded by a timeout, and is never retried.

Author: topicbulk Team
"""

import logging
from concurrent.futures import TimeoutError as FutureTimeout
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Set, Tuple, Union

from confluent_kafka import KafkaError, KafkaException
from confluent_kafka.admin import AdminClient, NewTopic

from topicbulk.cluster.properties import read_properties
from topicbulk.core.errors import ClientConfigError, CreationError, SnapshotFetchError

logger = logging.getLogger("topicbulk.admin")

DEFAULT_TIMEOUT = 5.0  # seconds, per network call


def _error_parts(exc: BaseException) -> Tuple[Optional[str], str]:
    """Returns (error code name, detail) for a KafkaException or anything else."""
    err = exc.args[0] if exc.args else None
    if isinstance(err, KafkaError):
        return err.name(), err.str()
    return None, str(exc) or type(exc).__name__


class ClusterAdmin:
    """Encapsulates the two admin operations a reconciliation run needs."""

    def __init__(self, client: AdminClient, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._client = client
        self.timeout = timeout

    @classmethod
    def from_properties(cls, path: Union[str, Path],
                        timeout: float = DEFAULT_TIMEOUT) -> "ClusterAdmin":
        """Builds the client from a properties file, passed through verbatim."""
        conf: Dict[str, str] = read_properties(path)
        logger.debug("Creating AdminClient with keys: %s", sorted(conf))
        try:
            client = AdminClient(conf)
        except KafkaException as e:
            _, detail = _error_parts(e)
            raise ClientConfigError(detail) from e
        return cls(client, timeout=timeout)

    # ---------- Snapshot ---------------------------------------------------

    def fetch_existing_topic_names(self, timeout: Optional[float] = None) -> Set[str]:
        """Returns the names of all topics on the cluster, or raises SnapshotFetchError."""
        try:
            metadata = self._client.list_topics(timeout=self.timeout if timeout is None else timeout)
        except KafkaException as e:
            _, detail = _error_parts(e)
            raise SnapshotFetchError(detail) from e
        names = set((metadata.topics or {}).keys())
        logger.info("Cluster reports %d existing topics", len(names))
        return names

    # ---------- Creation ---------------------------------------------------

    def create_topic(self, name: str, partitions: int, replication_factor: int,
                     config_overrides: Union[Mapping[str, str], Iterable[Tuple[str, str]]] = (),
                     timeout: Optional[float] = None) -> None:
        """
        Creates exactly one topic and waits for the broker's answer.
        Repeated config keys keep their last value. Rejections and timeouts
        raise CreationError.
        """
        timeout = self.timeout if timeout is None else timeout
        new_topic = NewTopic(
            name,
            num_partitions=partitions,
            replication_factor=replication_factor,
            config=dict(config_overrides),
        )
        try:
            futures = self._client.create_topics([new_topic], request_timeout=timeout)
            futures[name].result(timeout=timeout)
        except (KafkaException, FutureTimeout, ValueError) as e:
            code, detail = _error_parts(e)
            raise CreationError(name, detail, error_code=code) from e
        logger.debug("Broker acknowledged topic %s", name)
