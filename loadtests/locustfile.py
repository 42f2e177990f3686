"""Talex load testing: Locust entry point.

Imports every user class so Locust discovers them. Seed the catalogue first
(``POST /seed`` or ``python src/manage.py seed``) so shoppers have products.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py --host http://localhost:8000

    # Storefront traffic only:
    locust -f loadtests/locustfile.py ShopperUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.backoffice import BackOfficeUser  # noqa: F401
from loadtests.scenarios.storefront import ShopperUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Print the dashboard figures the run produced."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    try:
        resp = requests.get(f"{environment.host}/orders/dashboard", params={"days": 1}, timeout=5)
        resp.raise_for_status()
        figures = resp.json()
        print("[LOADTEST] Dashboard after run:")
        print(f"  orders today:       {figures['orders_current']}")
        print(f"  paid revenue today: {figures['revenue_current']}")
        for product in figures["top_products"]:
            print(f"  top seller:         {product['title']} x{product['quantity']}")
        print()
    except requests.RequestException as e:
        print(f"[LOADTEST] Could not fetch dashboard: {e}\n")
