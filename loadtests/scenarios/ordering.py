"""Ordering load test scenarios.

Stateful SequentialTaskSet journeys over the cart: a shopper who builds a
cart, applies a coupon and checks out, and one who keeps asking for totals
while changing the cart and never checks out.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_data, cart_item_data, coupon_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CartState


class _CartJourney(SequentialTaskSet):
    def on_start(self):
        self.state = CartState()

    def _create_cart(self):
        with self.client.post("/carts", json=cart_data(), catch_response=True, name="POST /carts") as resp:
            if resp.status_code == 201:
                self.state.cart_id = resp.json()["cart_id"]
            else:
                resp.failure(f"Create cart failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    def _add_item(self):
        with self.client.post(
            f"/carts/{self.state.cart_id}/items",
            json=cart_item_data(),
            catch_response=True,
            name="POST /carts/{id}/items",
        ) as resp:
            if resp.status_code == 200:
                item_id = resp.json()["item_id"]
                if item_id not in self.state.item_ids:
                    self.state.item_ids.append(item_id)
            else:
                resp.failure(f"Add cart item failed: {resp.status_code}: {extract_error_detail(resp)}")

    def _quote(self):
        with self.client.get(
            f"/carts/{self.state.cart_id}/totals",
            catch_response=True,
            name="GET /carts/{id}/totals",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Cart totals failed: {resp.status_code}: {extract_error_detail(resp)}")
                return
            body = resp.json()
            if body["unresolved"]:
                resp.failure(f"Cart has unresolved lines: {body['unresolved']}")
            self.state.last_total = body["total"]


class CartCheckoutJourney(_CartJourney):
    """Create Cart -> Add Items -> Apply Coupon -> Totals -> Checkout.

    Generates events: CartItemAdded (x2), CartCouponApplied, CartCheckedOut.
    """

    @task
    def create_cart(self):
        self._create_cart()

    @task
    def add_item_1(self):
        self._add_item()

    @task
    def add_item_2(self):
        self._add_item()

    @task
    def apply_coupon(self):
        with self.client.post(
            f"/carts/{self.state.cart_id}/coupon",
            json=coupon_data(),
            catch_response=True,
            name="POST /carts/{id}/coupon",
        ) as resp:
            if resp.status_code == 200:
                self.state.coupon_code = resp.json()["coupon_code"]
            else:
                resp.failure(f"Apply coupon failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def get_totals(self):
        self._quote()

    @task
    def checkout(self):
        with self.client.post(
            f"/carts/{self.state.cart_id}/checkout",
            catch_response=True,
            name="POST /carts/{id}/checkout",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Checkout failed: {resp.status_code}: {extract_error_detail(resp)}")
            elif resp.json()["total"] != self.state.last_total:
                resp.failure(f"Checkout total {resp.json()['total']} differs from quote {self.state.last_total}")

    @task
    def done(self):
        self.interrupt()


class CartBrowsingJourney(_CartJourney):
    """Create Cart -> Add Items -> Totals -> Change Quantity -> Invalid Coupon -> Totals.

    The shopper never checks out. The invalid coupon must be rejected.
    """

    @task
    def create_cart(self):
        self._create_cart()

    @task
    def add_items(self):
        for _ in range(random.randint(1, 3)):
            self._add_item()

    @task
    def first_quote(self):
        self._quote()

    @task
    def change_quantity(self):
        if not self.state.item_ids:
            return
        item_id = random.choice(self.state.item_ids)
        with self.client.put(
            f"/carts/{self.state.cart_id}/items/{item_id}",
            json={"new_quantity": random.randint(0, 4)},
            catch_response=True,
            name="PUT /carts/{id}/items/{item_id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update quantity failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def invalid_coupon(self):
        with self.client.post(
            f"/carts/{self.state.cart_id}/coupon",
            json=coupon_data(valid=False),
            catch_response=True,
            name="POST /carts/{id}/coupon [invalid]",
        ) as resp:
            if resp.status_code == 400:
                resp.success()
            else:
                resp.failure(f"Invalid coupon not rejected: {resp.status_code}")

    @task
    def second_quote(self):
        self._quote()

    @task
    def done(self):
        self.interrupt()


class OrderingUser(HttpUser):
    """Simulates shoppers building carts; most of them check out."""

    wait_time = between(1, 3)
    tasks = {CartCheckoutJourney: 3, CartBrowsingJourney: 2}
