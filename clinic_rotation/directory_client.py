"""
Doctor Directory API Client
Reads the active doctor list from the clinic's user service over HTTP
"""

import requests
import logging
from typing import Any, Dict, List, Optional

from clinic_rotation.config import ACTIVE_STATUS, DOCTOR_ROLE
from clinic_rotation.directory import is_active_doctor, normalize_doctor_record

logger = logging.getLogger(__name__)


class DoctorDirectoryClient:
    """
    Client for the clinic user service, used as a doctor directory
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize directory client

        Args:
            base_url: Base URL of the user service, e.g. https://clinic.example/api
            api_key: Bearer token, if the service requires one
            timeout: Per-request timeout in seconds
            session: Pre-configured session (tests, connection reuse)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

        self.session = session or requests.Session()
        self.session.headers.update({'Accept': 'application/json'})
        if api_key:
            self.session.headers.update({'Authorization': f'Bearer {api_key}'})

    def list_active_doctors(self) -> List[Dict[str, Any]]:
        """
        Retrieve active doctors with their weekly schedules

        Returns:
            List of doctor records ({"id", "name", "schedule", ...})
        """
        endpoint = f"{self.base_url}/doctors"

        params = {
            'role': DOCTOR_ROLE,
            'status': ACTIVE_STATUS
        }

        logger.info("Fetching active doctors")

        try:
            response = self.session.get(endpoint, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching doctors: {e}")
            raise

        if isinstance(data, dict):
            data = data.get('doctors', [])
        if not isinstance(data, list):
            raise ValueError(f"Unexpected doctor list payload from {endpoint}: {type(data).__name__}")

        doctors = [normalize_doctor_record(d) for d in data]
        # Filter again locally; the query params are only a hint to the service
        doctors = [d for d in doctors if is_active_doctor(d)]
        logger.info(f"Retrieved {len(doctors)} active doctors")
        return doctors
