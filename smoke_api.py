#!/usr/bin/env python3
"""
Live smoke test for a running MediGuard server.

Registers a throwaway patient, logs in, books an appointment, adds a
medication, reads both back and checks the admin route refuses a
patient token.  Usage:

    python smoke_api.py [BASE_URL]
"""
import sys
import time
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

BASE_URL = "http://127.0.0.1:3000"


@dataclass
class CheckResult:
    success: bool
    endpoint: str
    method: str
    status_code: int
    response_time: float
    error_message: str = ""
    description: str = ""


class SmokeTester:
    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.headers: Dict[str, str] = {}
        self.results: List[CheckResult] = []

    def check(self, method: str, endpoint: str, data: Optional[Dict[str, Any]] = None,
              expected_status: int = 200, description: str = "") -> Optional[requests.Response]:
        """Call one endpoint and record whether it answered with the expected status."""
        url = f"{self.base_url}{endpoint}"
        start = time.time()
        try:
            response = self.session.request(method, url, json=data, headers=self.headers, timeout=10)
        except requests.RequestException as e:
            self.results.append(CheckResult(False, endpoint, method, 0, time.time() - start, str(e), description))
            print(f"❌ {method} {endpoint} - error: {e}")
            return None
        elapsed = time.time() - start
        ok = response.status_code == expected_status
        self.results.append(CheckResult(
            success=ok,
            endpoint=endpoint,
            method=method,
            status_code=response.status_code,
            response_time=elapsed,
            error_message="" if ok else response.text[:200],
            description=description,
        ))
        mark = "✅" if ok else "❌"
        print(f"{mark} {method} {endpoint} - {response.status_code} ({elapsed:.2f}s) {description}")
        return response

    def run(self) -> bool:
        email = f"smoke-{uuid.uuid4().hex[:8]}@example.com"
        password = uuid.uuid4().hex

        self.check("GET", "/healthz", description="health")
        self.check("POST", "/api/auth/register",
                   {"name": "Smoke Test", "email": email, "password": password},
                   expected_status=201, description="register")
        self.check("POST", "/api/auth/login", {"email": email, "password": "wrong"},
                   expected_status=401, description="wrong password")
        r = self.check("POST", "/api/auth/login", {"email": email, "password": password},
                       description="login")
        if r is None or r.status_code != 200:
            return self.report()
        self.headers = {"Authorization": f"Bearer {r.json()['token']}"}

        self.check("POST", "/api/appointments",
                   {"doctor_name": "Dr. X", "specialty": "Cardiology", "date": "2024-05-01", "time": "10:00"},
                   expected_status=201, description="book appointment")
        self.check("GET", "/api/appointments", description="list appointments")
        self.check("POST", "/api/medications",
                   {"name": "Metformin", "dosage": "500mg", "frequency": "Twice daily", "time": "08:00"},
                   expected_status=201, description="add medication")
        self.check("GET", "/api/medications", description="list medications")
        self.check("GET", "/api/admin/stats", expected_status=403, description="patient blocked from admin")
        return self.report()

    def report(self) -> bool:
        failed = [r for r in self.results if not r.success]
        print(f"\n{len(self.results) - len(failed)}/{len(self.results)} checks passed")
        for r in failed:
            print(f"  - {r.method} {r.endpoint}: {r.status_code} {r.error_message}")
        return not failed


if __name__ == "__main__":
    base = sys.argv[1] if len(sys.argv) > 1 else BASE_URL
    sys.exit(0 if SmokeTester(base).run() else 1)
