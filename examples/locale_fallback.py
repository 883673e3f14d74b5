"""Locale fallback example for faultcodes.

Demonstrates how messages are looked up along the locale chain
(de_AT -> de -> default locale -> root) and how a broken template store
never prevents an error from being reported.

Scenarios covered:
1. Collections in a directory tree (PathTemplateStore)
2. Explaining where a message came from
3. A store that fails on every lookup

Python 3.13+.
"""

import logging
import tempfile
from pathlib import Path

from faultcodes import LocalizedFaultCode, MessageResolver, set_default_locale
from faultcodes.bundles import PathTemplateStore

logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


class ShippingCode(LocalizedFaultCode):
    ADDRESS_INVALID = "Address {0} is invalid"
    WEIGHT_EXCEEDED = "Parcel weighs {0} kg, limit is {1} kg"
    CARRIER_DOWN = "Carrier {0} is unavailable"


BASE_NAME = ShippingCode.ADDRESS_INVALID.resource_bundle_base_name
FILE_STEM = BASE_NAME.replace(".", "/")

COLLECTIONS = {
    "": "CARRIER_DOWN = Carrier {0} is unavailable, try again later\n",
    "de": (
        "ADDRESS_INVALID = Adresse {0} ist ung\\u00fcltig\n"
        "WEIGHT_EXCEEDED = Paket wiegt {0} kg, erlaubt sind {1} kg\n"
    ),
    "de_AT": "ADDRESS_INVALID = Die Adresse {0} ist leider ung\\u00fcltig\n",
}

set_default_locale("en_US")

with tempfile.TemporaryDirectory() as tmp:
    root = Path(tmp)
    for locale, text in COLLECTIONS.items():
        suffix = f"_{locale}" if locale else ""
        path = root / f"{FILE_STEM}{suffix}.properties"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")

    resolver = MessageResolver(PathTemplateStore(root))

    # Scenario 1: most specific collection first
    print("=" * 50)
    print("Scenario 1: Locale Chain")
    print("=" * 50)

    print(resolver.resolve(ShippingCode.ADDRESS_INVALID, "Ring 1", locale="de_AT"))
    # Output: Die Adresse Ring 1 ist leider ungültig
    print(resolver.resolve(ShippingCode.WEIGHT_EXCEEDED, 31.5, 30, locale="de_AT"))
    # Output: Paket wiegt 31,5 kg, erlaubt sind 30 kg
    print(resolver.resolve(ShippingCode.CARRIER_DOWN, "DHL", locale="de_AT"))
    # Output: Carrier DHL is unavailable, try again later
    print(resolver.resolve(ShippingCode.ADDRESS_INVALID, "Main St 1", locale="fr_FR"))
    # Output: Address Main St 1 is invalid

    # Scenario 2: explain()
    print("\n" + "=" * 50)
    print("Scenario 2: Explaining a Resolution")
    print("=" * 50)

    resolution = resolver.explain(ShippingCode.WEIGHT_EXCEEDED, 31.5, 30, locale="de_AT")
    print(f"{resolution.message!r} from {resolution.source} [{resolution.locale}]")
    for attempt in resolution.attempts:
        print(f"  {attempt.locale or '<root>'}: {attempt.status}")


# Scenario 3: failing store
print("\n" + "=" * 50)
print("Scenario 3: Failing Store")
print("=" * 50)


class UnreachableStore:
    def lookup(self, base_name: str, locale: str) -> None:
        msg = "translation service unreachable"
        raise ConnectionError(msg)


print(MessageResolver(UnreachableStore()).resolve(ShippingCode.CARRIER_DOWN, "UPS"))
# Output: Carrier UPS is unavailable   (store errors are logged at DEBUG)
