#-*- coding: utf-8 -*-

import logging
from os.path import dirname, join
from types import SimpleNamespace

from condi import App, Condi, Controller, helper
from condi.extras import JinjaRenderer
from werkzeug.serving import run_simple

# A small store that uses predicates and synonyms to keep conditional
# logic out of its template.
#
# Predicates and synonyms are defined inside the action, so they can close
# over whatever the action has loaded. The template calls them like any
# other helper.
#
# This example needs jinja2 installed to work.

app = App(renderer=JinjaRenderer(join(dirname(__file__), "templates")))

DELIVERIES = {"1Z001": "in transit", "1Z002": "arrived at front door"}


@app.route("/")
class StoreController(Condi, Controller):
    def index(self):
        customer = SimpleNamespace(name="Mary", new_customer=True)
        cart = SimpleNamespace(amount=105)
        items = [
            SimpleNamespace(name="Hat", status="shipped", tracking="1Z001"),
            SimpleNamespace(name="Scarf", status="shipped", tracking="1Z002"),
            SimpleNamespace(name="Gloves", status="ordered", tracking=None),
        ]

        @self.predicate
        def show_free_shipping():
            return customer.new_customer and cart.amount > 100

        @self.synonym("css_for_item_status")
        def css_for(item):
            if len(items) >= 3 and item.status == "shipped":
                if "arrived" not in DELIVERIES[item.tracking]:
                    return "shipping"
                else:
                    return "shipped"
            else:
                return "processing"

        return {"customer": customer, "cart": cart, "items": items}

    @helper
    def currency(self, amount):
        return "${:,.2f}".format(amount)


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    run_simple('localhost', 5002, app, use_reloader=True, use_debugger=True)
