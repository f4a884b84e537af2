import logging
from proxyobserver import proxy_observer, UNDEFINED

logging.basicConfig(level=logging.INFO)
log = logging.getLogger("change_log")


def describe(*chain):
    leaf = chain[-1]
    path = ".".join(str(step.prop) for step in chain)
    if leaf.value is UNDEFINED:
        log.info("deleted %s (was %r)", path, leaf.old_value)
    elif leaf.old_value is UNDEFINED:
        log.info("added   %s = %r", path, leaf.value)
    else:
        log.info("changed %s: %r -> %r", path, leaf.old_value, leaf.value)


inventory = {
    "warehouse": {
        "shelves": [
            {"item": "bolts", "count": 120},
            {"item": "nuts", "count": 80},
        ],
    },
    "open_orders": [],
}

proxy = proxy_observer(inventory, describe)

shelves = proxy["warehouse"]["shelves"]
shelves[0]["count"] -= 20
shelves[1]["count"] = 80            # same value, nothing logged
shelves.append({"item": "washers", "count": 500})
proxy["open_orders"].append({"item": "bolts", "qty": 20})
del shelves[1]["count"]
proxy["warehouse"]["manager"] = "Dana"

print(inventory)
