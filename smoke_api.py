#!/usr/bin/env python3
"""
Smoke test for a running menu access API.

Logs in with every seeded test user (``manage.py seed_role_menus``), walks
the navigation endpoints and reports failures.  Set ``HMS_BASE_URL`` to
target another server.
"""
import os
import sys
import time
from dataclasses import dataclass
from typing import Dict, Optional

import requests

BASE_URL = os.getenv("HMS_BASE_URL", "http://127.0.0.1:8000")

TEST_USERS = {
    "administrator": {"username": "admin1", "password": "123456", "admin": True},
    "doctor": {"username": "doctor1", "password": "123456", "admin": False},
    "nurse": {"username": "nurse1", "password": "123456", "admin": False},
    "cashier": {"username": "cashier1", "password": "123456", "admin": False},
    "pharmacist": {"username": "pharmacist1", "password": "123456", "admin": False},
}


@dataclass
class TestResult:
    success: bool
    endpoint: str
    method: str
    status_code: int
    response_time: float
    error_message: str = ""
    user_role: str = ""


class MenuAPITester:
    def __init__(self):
        self.session = requests.Session()
        self.headers = {}
        self.current_role = None
        self.test_results = []
        self.error_results = []

    def _record(self, result: TestResult) -> TestResult:
        self.test_results.append(result)
        mark = "ok  " if result.success else "FAIL"
        print(f"{mark} [{result.user_role}] {result.method} {result.endpoint} "
              f"-> {result.status_code} ({result.response_time:.2f}s) {result.error_message}")
        if not result.success:
            self.error_results.append(result)
        return result

    def login(self, role: str, username: str, password: str) -> Optional[dict]:
        self.current_role = role
        start_time = time.time()
        try:
            response = self.session.post(f"{BASE_URL}/api/auth/login",
                                         json={"username": username, "password": password})
        except requests.RequestException as e:
            self._record(TestResult(False, "/api/auth/login", "POST", 0, 0, str(e), role))
            return None
        response_time = time.time() - start_time
        if response.status_code != 200:
            self._record(TestResult(False, "/api/auth/login", "POST", response.status_code,
                                    response_time, response.text[:200], role))
            return None
        data = response.json()
        self.headers = {"Authorization": f"Token {data['token']}"}
        self._record(TestResult(True, "/api/auth/login", "POST", 200, response_time, user_role=role))
        return data

    def test_endpoint(self, method: str, endpoint: str, data: Dict = None,
                      expected_status: int = 200) -> Optional[requests.Response]:
        url = f"{BASE_URL}{endpoint}"
        start_time = time.time()
        try:
            response = self.session.request(method, url, json=data, headers=self.headers)
        except requests.RequestException as e:
            self._record(TestResult(False, endpoint, method, 0, 0, str(e), self.current_role))
            return None
        response_time = time.time() - start_time
        ok = response.status_code == expected_status
        self._record(TestResult(ok, endpoint, method, response.status_code, response_time,
                                "" if ok else response.text[:200], self.current_role))
        return response

    def run_role(self, role: str, cfg: dict) -> None:
        user = self.login(role, cfg["username"], cfg["password"])
        if not user:
            return
        self.test_endpoint("GET", "/api/users/me/menu-access")
        menu = self.test_endpoint("GET", "/api/navigation")
        categories = menu.json().get("categories", []) if menu is not None and menu.ok else []
        for category in categories:
            for item in category["items"][:1]:
                self.test_endpoint("POST", "/api/navigation/pathname", {"pathname": item["href"]})
        if categories:
            self.test_endpoint("POST", "/api/navigation/active-category", {"categoryId": categories[-1]["id"]})
        self.test_endpoint("GET", "/api/navigation/tabs?pagePath=/patients/1")
        self.test_endpoint("GET", "/api/queue/service-points")

        admin_status = 200 if cfg["admin"] else 403
        self.test_endpoint("GET", "/api/roles", expected_status=admin_status)
        self.test_endpoint("GET", "/api/navigation/registry", expected_status=admin_status)
        role_id = user["user"]["roleId"]
        if role_id:
            self.test_endpoint("GET", f"/api/roles/{role_id}/menu-config", expected_status=admin_status)
        self.test_endpoint("POST", "/api/auth/logout", {})
        self.headers = {}

    def run(self) -> bool:
        self.current_role = "anonymous"
        self.test_endpoint("GET", "/healthz")
        self.test_endpoint("GET", "/api/navigation", expected_status=401)
        for role, cfg in TEST_USERS.items():
            self.run_role(role, cfg)
        total = len(self.test_results)
        print(f"\n{total - len(self.error_results)}/{total} checks passed")
        return not self.error_results


def main():
    tester = MenuAPITester()
    sys.exit(0 if tester.run() else 1)


if __name__ == "__main__":
    main()
