"""Catalogue load test scenarios: read-heavy browsing of establishments, products and promotions."""

import random
from datetime import date

from locust import HttpUser, between, task

from loadtests.data_generators import POLOS, PRODUCT_IDS, establishment_search, product_search, session_id
from loadtests.helpers.response import extract_error_detail


class CatalogueUser(HttpUser):
    """Browses establishments, products and promotions, occasionally redeeming one."""

    wait_time = between(0.5, 2)

    @task(3)
    def list_establishments(self):
        self.client.get("/establishments", params=establishment_search(), name="GET /establishments")

    @task(5)
    def list_products(self):
        self.client.get("/products", params=product_search(), name="GET /products")

    @task(3)
    def view_product(self):
        self.client.get(f"/products/{random.choice(PRODUCT_IDS)}", name="GET /products/{id}")

    @task(2)
    def list_promotions(self):
        self.client.get("/promotions", params={"polo": random.choice(POLOS)}, name="GET /promotions")

    @task(1)
    def redeem_promotion(self):
        # Noite da Pizza runs until the end of 2025
        with self.client.post(
            "/promotions/2/redemptions",
            json={"session_id": session_id(), "redeemed_on": date(2025, 6, 1).isoformat()},
            catch_response=True,
            name="POST /promotions/{id}/redemptions",
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Redeem promotion failed: {resp.status_code}: {extract_error_detail(resp)}")
