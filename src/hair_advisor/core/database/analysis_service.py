#!/usr/bin/env python3
"""
Analysis Database Service

Stores hair analysis reports per user and timestamp. Only the raw report
text and the image references are persisted; structured fields are
rebuilt by the report parser when a record is read back.
"""

import logging
from datetime import datetime, timezone, timedelta
from typing import Dict, List, Optional

import psycopg
from psycopg.types.json import Jsonb

from ..exceptions import DatabaseOperationError
from ..models.record import AnalysisRecord

logger = logging.getLogger(__name__)

TABLE = 'hair_analyses'

_COLUMNS = "id, user_id, analysis_text, image_references, created_at"


class AnalysisService:
    """Service for analysis history database operations."""

    def __init__(self, connection_manager):
        """
        Initialize analysis service.

        Args:
            connection_manager: Database connection manager instance
        """
        self.connection_manager = connection_manager

    def save_analysis(self, user_id: str, raw_text: str,
                      image_references: Optional[Dict[str, str]] = None) -> int:
        """
        Store one analysis report.

        Args:
            user_id: Owner of the analysis
            raw_text: Report text exactly as returned by the model
            image_references: View name ("up", "back", "left", "right") to image URL

        Returns:
            Analysis ID
        """
        if not user_id:
            raise ValueError("user_id is required")

        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute(f"""
                    INSERT INTO {TABLE} (
                        user_id, analysis_text, image_references, created_at
                    ) VALUES (%s, %s, %s, %s)
                    RETURNING id
                """, (
                    user_id,
                    raw_text,
                    Jsonb(dict(image_references or {})),
                    datetime.now(timezone.utc)
                ))

                result = cursor.fetchone()
                analysis_id = result['id']
                logger.info(f"Stored analysis with ID {analysis_id} for user {user_id}")
                return analysis_id

        except psycopg.Error as e:
            logger.error(f"Failed to store analysis: {e}")
            raise DatabaseOperationError('insert', TABLE, e) from e

    def get_user_analyses(self, user_id: str, days: int = 30, limit: int = 50) -> List[AnalysisRecord]:
        """
        Get a user's analyses, newest first.

        Args:
            user_id: Owner of the analyses
            days: Number of days to look back
            limit: Maximum number of records

        Returns:
            List of AnalysisRecord objects
        """
        cutoff = datetime.now(timezone.utc) - timedelta(days=days)
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute(f"""
                    SELECT {_COLUMNS}
                    FROM {TABLE}
                    WHERE user_id = %s AND created_at >= %s
                    ORDER BY created_at DESC
                    LIMIT %s
                """, (user_id, cutoff, limit))

                records = [AnalysisRecord.from_dict(dict(row)) for row in cursor.fetchall()]
                logger.debug(f"Found {len(records)} analyses for user {user_id} in last {days} days")
                return records

        except psycopg.Error as e:
            logger.error(f"Failed to get analyses for user {user_id}: {e}")
            raise DatabaseOperationError('select', TABLE, e) from e

    def get_latest_analysis(self, user_id: str) -> Optional[AnalysisRecord]:
        """Most recent analysis for a user, or None."""
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute(f"""
                    SELECT {_COLUMNS}
                    FROM {TABLE}
                    WHERE user_id = %s
                    ORDER BY created_at DESC
                    LIMIT 1
                """, (user_id,))

                row = cursor.fetchone()
                return AnalysisRecord.from_dict(dict(row)) if row else None

        except psycopg.Error as e:
            logger.error(f"Failed to get latest analysis for user {user_id}: {e}")
            raise DatabaseOperationError('select', TABLE, e) from e

    def get_analysis(self, analysis_id: int) -> Optional[AnalysisRecord]:
        """Analysis by ID, or None if not found."""
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute(f"""
                    SELECT {_COLUMNS}
                    FROM {TABLE}
                    WHERE id = %s
                """, (analysis_id,))

                row = cursor.fetchone()
                return AnalysisRecord.from_dict(dict(row)) if row else None

        except psycopg.Error as e:
            logger.error(f"Failed to get analysis {analysis_id}: {e}")
            raise DatabaseOperationError('select', TABLE, e) from e

    def delete_analysis(self, analysis_id: int) -> bool:
        """
        Delete an analysis.

        Returns:
            True if a row was deleted
        """
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute(f"DELETE FROM {TABLE} WHERE id = %s", (analysis_id,))
                deleted = cursor.rowcount > 0

            if deleted:
                logger.info(f"Deleted analysis {analysis_id}")
            else:
                logger.debug(f"No analysis {analysis_id} to delete")
            return deleted

        except psycopg.Error as e:
            logger.error(f"Failed to delete analysis {analysis_id}: {e}")
            raise DatabaseOperationError('delete', TABLE, e) from e
