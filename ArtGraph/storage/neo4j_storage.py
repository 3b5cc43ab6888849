"""
Neo4j Connection for ArtGraph
Opens the driver once per process and proves it usable before handing it out:
connectivity, server version, and a write/read/delete round trip
"""
import threading
import time
import uuid
from contextlib import contextmanager
from enum import Enum
from typing import Optional, Callable

from neo4j import GraphDatabase, Driver, ManagedTransaction, Session

from ..config import StoreConfig, load_store_config
from ..logging.error import error_logger, log_and_continue
from ..logging.logger import setup_logger
from .errors import (
    StoreError,
    ConfigurationError,
    StoreConnectionError,
    ConnectivityError,
    WritePermissionError,
    NotInitializedError,
)

logger = setup_logger(__name__)

PROBE_LABEL = "TestNode"
PROBE_PREFIX = "test_"


class StoreState(str, Enum):
    """Lifecycle of the process-wide connection"""
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


def new_probe_id() -> str:
    """Unique id for a probe record, e.g. test_1718000000000_3f2a9c1b"""
    return f"{PROBE_PREFIX}{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"


def _write_probe(tx: ManagedTransaction, probe_id: str) -> int:
    """Create, read back and delete one probe node; return how many were read"""
    tx.run(f"CREATE (n:{PROBE_LABEL} {{id: $probe_id}}) RETURN n", probe_id=probe_id)
    result = tx.run(f"MATCH (n:{PROBE_LABEL} {{id: $probe_id}}) RETURN n", probe_id=probe_id)
    records = list(result)
    tx.run(f"MATCH (n:{PROBE_LABEL} {{id: $probe_id}}) DELETE n", probe_id=probe_id)
    return len(records)


@log_and_continue("Failed to clean up test nodes", logger=logger)
def _sweep_probe_records(session: Session) -> None:
    """Delete any probe node left behind by an interrupted probe"""
    session.run(
        f"MATCH (n:{PROBE_LABEL}) WHERE n.id STARTS WITH $prefix DELETE n",
        prefix=PROBE_PREFIX
    ).consume()


@log_and_continue("Failed to close probe session", logger=logger)
def _close_session(session: Session) -> None:
    session.close()


@log_and_continue("Failed to close Neo4j driver", logger=logger)
def _close_driver(driver: Driver) -> None:
    driver.close()


@contextmanager
def _probe_step(error_cls: type, message: str):
    """Re-raise driver failures inside the block as ``error_cls``"""
    try:
        yield
    except StoreError:
        raise
    except Exception as e:
        raise error_cls(f"{message}: {e}") from e


@contextmanager
def probe_session(driver: Driver):
    """
    Session used for the startup probes.

    Whatever happens inside the block, leftover probe records are swept
    before the session is closed. A failing sweep is only logged.
    """
    session = driver.session()
    try:
        yield session
    finally:
        _sweep_probe_records(session)
        _close_session(session)


class Neo4jConnection:
    """
    Owner of the process-wide Neo4j driver.

    Request handlers borrow the driver through get_driver() and must never
    close it; only close() (on shutdown) does that.
    """

    def __init__(self, driver_factory: Callable[..., Driver] = GraphDatabase.driver):
        """
        Args:
            driver_factory: Callable building the driver; GraphDatabase.driver by default
        """
        self._driver_factory = driver_factory
        self._driver: Optional[Driver] = None
        self._state = StoreState.UNINITIALIZED
        self._lock = threading.Lock()
        self.server_info: Optional[dict] = None

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is StoreState.READY

    def initialize(self, config: Optional[StoreConfig] = None) -> Driver:
        """
        Connect to Neo4j and verify the database is healthy

        Args:
            config: Connection settings; loaded from the environment when omitted

        Returns:
            The validated driver

        Raises:
            ConfigurationError: uri, user or password missing, or the config file is unusable
            StoreConnectionError: the driver could not be created
            ConnectivityError: the connectivity or version probe failed
            WritePermissionError: the write probe did not round-trip its record
        """
        with self._lock:
            if self._state is StoreState.READY:
                logger.warning("Neo4j already initialized; reusing the existing driver")
                return self._driver
            self._state = StoreState.INITIALIZING

        driver = None
        try:
            config = self._validate(config)

            logger.info(f"Connecting to Neo4j at {config.uri}...")
            with _probe_step(StoreConnectionError, "Failed to create Neo4j driver"):
                driver = self._driver_factory(
                    config.uri,
                    auth=(config.user, config.password),
                    max_transaction_retry_time=config.max_transaction_retry_time
                )

            with probe_session(driver) as session:
                self._check_connectivity(session)
                self._check_version(session)
                self._check_write_permission(session)
        except Exception as e:
            logger.error(f"Error during Neo4j initialization: {e}")
            error_logger.error(f"Failed to initialize Neo4j: {e!r}")
            if driver is not None:
                _close_driver(driver)
            with self._lock:
                self._driver = None
                self._state = StoreState.FAILED
            raise

        with self._lock:
            self._driver = driver
            self._state = StoreState.READY
        logger.info("✓ Successfully validated Neo4j connection and permissions")
        return driver

    def _validate(self, config: Optional[StoreConfig]) -> StoreConfig:
        if config is None:
            config = load_store_config()
        missing = config.missing_fields()
        if missing:
            raise ConfigurationError(
                f"Missing required Neo4j settings: {', '.join(missing)}"
            )
        return config

    def _check_connectivity(self, session: Session) -> None:
        logger.info("Testing Neo4j connectivity...")
        with _probe_step(ConnectivityError, "Neo4j connectivity test failed"):
            session.run("RETURN 1 AS test").consume()

    def _check_version(self, session: Session) -> None:
        # Only feeds a log line, but a failure here still aborts startup
        logger.info("Checking Neo4j version...")
        with _probe_step(ConnectivityError, "Neo4j version check failed"):
            record = session.run(
                "CALL dbms.components() YIELD name, versions, edition"
            ).single()
            if record is None:
                raise ConnectivityError("Neo4j version check returned no components")
            self.server_info = {
                'name': record['name'],
                'edition': record['edition'],
                'version': record['versions'][0],
            }
        logger.info(
            f"Connected to Neo4j {self.server_info['edition']} Edition "
            f"v{self.server_info['version']}"
        )

    def _check_write_permission(self, session: Session) -> None:
        logger.info("Verifying database permissions...")
        probe_id = new_probe_id()
        with _probe_step(WritePermissionError, "Write permission test failed"):
            found = session.execute_write(_write_probe, probe_id)
        if found != 1:
            raise WritePermissionError(
                f"Write permission test failed - expected 1 test node, found {found}"
            )

    def get_driver(self) -> Driver:
        """
        Get the Neo4j driver instance

        Raises:
            NotInitializedError: initialize() has not succeeded yet
        """
        with self._lock:
            driver = self._driver
        if driver is None:
            raise NotInitializedError("Neo4j driver not initialized. Call initialize() first.")
        return driver

    def close(self) -> None:
        """Close the Neo4j driver; a no-op when nothing is open"""
        with self._lock:
            driver, self._driver = self._driver, None
            self._state = StoreState.UNINITIALIZED
            self.server_info = None
        if driver is not None:
            driver.close()
            logger.info("Neo4j connection closed")


# Singleton instance
_connection = Neo4jConnection()


def get_connection() -> Neo4jConnection:
    """The process-wide connection owner"""
    return _connection


def initialize(config: Optional[StoreConfig] = None) -> Driver:
    """Initialize the process-wide Neo4j driver (see Neo4jConnection.initialize)"""
    return _connection.initialize(config)


def get_driver() -> Driver:
    """Get the process-wide Neo4j driver"""
    return _connection.get_driver()


def close() -> None:
    """Close the process-wide Neo4j driver"""
    _connection.close()
