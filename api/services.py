"""
Service Layer for ArtGraph API
==============================

Business logic behind the API endpoints. Services receive the Neo4j driver
from the caller; they never open or close it themselves.
"""

import os
from datetime import datetime, timezone
from typing import Optional

from neo4j import Driver

from ArtGraph import __version__
from ArtGraph.logging.logger import setup_logger

from .models import (
    ApiStatus, DependencyStatus, HealthDependencies, HealthResponse,
    GraphResponse, GraphUser, GraphImage, ImageAttribute, ImageStatus,
)

logger = setup_logger(__name__)


class HealthService:
    """Reports API and dependency health"""

    def check(self, driver: Optional[Driver]) -> HealthResponse:
        """
        Build the health report.

        Args:
            driver: The process-wide driver, or None when it is not initialized

        Returns:
            HealthResponse; status is degraded when Neo4j cannot be reached
        """
        neo4j_status = self.check_neo4j(driver)
        return HealthResponse(
            status=ApiStatus.HEALTHY if neo4j_status is DependencyStatus.CONNECTED else ApiStatus.DEGRADED,
            environment=os.environ.get('APP_ENV'),
            version=__version__,
            dependencies=HealthDependencies(neo4j=neo4j_status)
        )

    def check_neo4j(self, driver: Optional[Driver]) -> DependencyStatus:
        if driver is None:
            return DependencyStatus.DISCONNECTED
        try:
            with driver.session() as session:
                session.run("RETURN 1 AS test").consume()
            return DependencyStatus.CONNECTED
        except Exception as e:
            logger.warning(f"Neo4j health check failed: {e}")
            return DependencyStatus.DISCONNECTED


class GraphService:
    """Serves graph data for visualization"""

    def get_graph(self) -> GraphResponse:
        # Sample payload until graph queries exist
        now = datetime.now(timezone.utc)
        return GraphResponse(
            users=[
                GraphUser(
                    userId='sample_user_1',
                    createdAt=now,
                    lastLogin=now,
                    images=[
                        GraphImage(
                            imageId='sample_image_1',
                            uploadedAt=now,
                            url='https://storage.googleapis.com/sample/image1.jpg',
                            status=ImageStatus.PROCESSED,
                            attributes=[
                                ImageAttribute(type='object', value='mountain'),
                                ImageAttribute(type='technique', value='oil_painting'),
                                ImageAttribute(type='composition', value='rule_of_thirds'),
                            ]
                        )
                    ]
                )
            ],
            root='root'
        )


# Service instances
health_service = HealthService()
graph_service = GraphService()
