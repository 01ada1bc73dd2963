"""Region guide catalog: point-in-region lookup and tip sampling.

Guides are checked in declaration order and the first box containing the
point wins, even where boxes overlap (the tropical band overlaps several
continents). Existing ``ecoRegion`` values depend on that order, so new
guides go at the end.
"""

from __future__ import annotations

import logging
import random

from abroad.models.pin import Pin
from abroad.models.region import RegionGuide

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 5

GUIDES: list[RegionGuide] = [
    RegionGuide(
        region="Tropical Regions",
        latitude_range=(-10, 25),
        longitude_range=(-180, 180),
        eco_tips=[
            "Use reef-safe sunscreen to protect marine ecosystems.",
            "Book stays at eco-lodges that use solar energy.",
            "Snorkel responsibly and never touch or step on coral reefs.",
            "Support local fishermen by choosing sustainably sourced seafood.",
            "Carry a reusable water bottle to reduce plastic waste.",
            "Bring biodegradable toiletries to minimize pollution.",
            "Use electric or human-powered transport like bikes where possible.",
            "Join an eco-tour to learn about marine conservation.",
            "Pack out all trash, especially in remote island areas.",
            "Reduce water consumption by taking quick showers over baths.",
        ],
        packing_list=[
            "Reef-safe sunscreen",
            "Biodegradable shampoo & conditioner",
            "Reusable water bottle with filter",
            "Lightweight, fast-drying clothing",
            "Eco-friendly insect repellent",
            "Solar-powered charger",
            "Reusable waterproof dry bag",
            "Snorkel gear (to avoid using rentals)",
            "Recycled or organic cotton beach towel",
            "Eco-friendly swimwear",
        ],
    ),
    RegionGuide(
        region="Europe",
        latitude_range=(35, 70),
        longitude_range=(-10, 50),
        eco_tips=[
            "Travel by train; Europe has an excellent rail network.",
            "Stay in eco-certified hotels or sustainable rentals.",
            "Choose locally-sourced vegetarian meals to cut carbon emissions.",
            "Bring a refillable bottle; many cities offer free public fountains.",
            "Walk, bike, or use public transport instead of renting a car.",
            "Carry a reusable coffee cup to cut down on single-use plastics.",
            "Avoid mass tourism spots and explore lesser-known destinations.",
            "Pack light to reduce airline emissions.",
            "Opt for digital travel documents instead of printing tickets.",
            "Shop for locally made souvenirs rather than mass-produced trinkets.",
        ],
        packing_list=[
            "Comfortable walking shoes",
            "Refillable water bottle with built-in filter",
            "Multi-use scarf for layering",
            "E-reader (to save paper books)",
            "Lightweight power bank",
            "Bamboo cutlery set for picnics",
            "Reusable produce bags for markets",
            "Collapsible, reusable coffee cup",
            "Digital transit pass or rail card",
            "Energy-efficient travel adapter",
        ],
    ),
    RegionGuide(
        region="Australia & New Zealand",
        latitude_range=(-50, 0),
        longitude_range=(110, 180),
        eco_tips=[
            "Explore national parks and Indigenous-led eco-tours.",
            "Choose electric or hybrid vehicles when road-tripping.",
            "Respect wildlife: keep a safe distance and avoid feeding animals.",
            "Use biodegradable soaps when camping in the outback.",
            "Stay in eco-certified accommodations with water conservation practices.",
            "Bring a reusable coffee cup; coffee culture is strong here.",
            "Eat at farm-to-table restaurants supporting local producers.",
            "Reduce plastic use by bringing your own cutlery and containers.",
            "Go glamping instead of traditional resorts.",
            "Support conservation by visiting wildlife sanctuaries, not zoos.",
        ],
        packing_list=[
            "Wide-brim hat for sun protection",
            "Sustainable hiking boots",
            "Refillable insulated water bottle",
            "Merino wool clothing for temperature regulation",
            "Reef-safe sunscreen for the Great Barrier Reef",
            "Reusable snack pouches for road trips",
            "Compact reusable coffee cup",
            "Quick-dry, biodegradable travel towel",
            "Eco-friendly binoculars for wildlife spotting",
            "Rechargeable camping lantern",
        ],
    ),
    RegionGuide(
        region="India & South Asia",
        latitude_range=(5, 35),
        longitude_range=(60, 100),
        eco_tips=[
            "Take the railways or public transport instead of domestic flights.",
            "Stay at eco-resorts or heritage homestays supporting local communities.",
            "Carry a filtered water bottle to avoid buying plastic bottles.",
            "Dress conservatively to respect cultural norms.",
            "Shop at local markets instead of chain supermarkets.",
            "Try vegetarian or plant-based meals.",
            "Use a hand fan or cool cloth instead of air-conditioning.",
            "Refill reusable spice containers when buying at markets.",
            "Support ethical wildlife sanctuaries over animal tourism attractions.",
            "Reduce textile waste by buying handcrafted garments from artisans.",
        ],
        packing_list=[
            "Filtered water bottle",
            "Breathable cotton clothing",
            "Bamboo toothbrush & zero-waste toothpaste",
            "Multi-purpose scarf for covering shoulders",
            "Small hand fan for cooling",
            "Reusable stainless steel lunch box",
            "Biodegradable laundry detergent sheets",
            "Reusable shopping tote",
            "Compostable wet wipes for hygiene",
            "Sustainable sandals for temple visits",
        ],
    ),
    RegionGuide(
        region="North America",
        latitude_range=(20, 60),
        longitude_range=(-130, -60),
        eco_tips=[
            "Visit national parks and follow Leave No Trace principles.",
            "Book eco-friendly hotels or sustainable tiny homes.",
            "Use car-sharing services or rent a hybrid or electric car.",
            "Reduce waste by packing a zero-waste travel kit.",
            "Take direct flights to cut down on carbon emissions.",
            "Support Indigenous-owned tourism experiences.",
            "Shop at local farmers' markets instead of big supermarkets.",
            "Opt for sustainable camping gear when exploring outdoors.",
            "Carry a reusable travel cutlery set to avoid plastic waste.",
            "Turn off lights and AC when leaving your hotel room.",
        ],
        packing_list=[
            "Zero-waste cutlery kit",
            "Portable solar charger",
            "Sustainable hiking boots",
            "Eco-friendly camping gear",
            "Reusable silicone food bags",
            "Compostable trash bag for waste collection",
            "Bamboo toothbrush & toothpaste tabs",
            "Multi-purpose eco-friendly backpack",
            "Reusable snack pouch for road trips",
            "Collapsible, BPA-free water bottle",
        ],
    ),
    RegionGuide(
        region="South America",
        latitude_range=(-55, 15),
        longitude_range=(-80, -35),
        eco_tips=[
            "Stay in eco-lodges supporting rainforest conservation.",
            "Use public buses instead of flights between cities.",
            "Avoid souvenirs made from endangered species.",
            "Eat at family-owned restaurants that use seasonal, local ingredients.",
            "Join reforestation projects or community-based tourism experiences.",
            "Use biodegradable insect repellent to protect rainforest ecosystems.",
            "Learn about Indigenous cultures and traditions before visiting.",
            "Reduce plastic waste by bringing a reusable straw and utensils.",
            "Respect local wildlife; avoid petting or feeding wild animals.",
            "Support local guides for responsible rainforest tours.",
        ],
        packing_list=[
            "Mosquito-repellent clothing",
            "Refillable water filter bottle",
            "Waterproof, biodegradable sunscreen",
            "Reusable silicone snack bags",
            "Rain poncho made from recycled materials",
            "Hand-crank flashlight",
            "Quick-dry, odor-resistant clothing",
            "Organic cotton hammock",
            "Travel journal",
            "Portable coffee press for fair-trade coffee",
        ],
    ),
    RegionGuide(
        region="Africa",
        latitude_range=(-35, 37),
        longitude_range=(-20, 55),
        eco_tips=[
            "Choose safaris that follow responsible wildlife tourism practices.",
            "Stay in community-run eco-lodges.",
            "Refill your water bottle at purification stations.",
            "Opt for safari gear made from recycled materials.",
            "Support local artisans by purchasing handmade crafts.",
            "Use biodegradable sunscreen to avoid polluting rivers and lakes.",
            "Bring your own reusable hygiene products.",
            "Book rewilding projects or permaculture farm stays.",
            "Pack light to minimize fuel consumption during flights and safaris.",
            "Learn about the local ecosystem and conservation efforts before visiting.",
        ],
        packing_list=[
            "UV-protective, lightweight clothing",
            "Wide-brim sun hat",
            "Binoculars for ethical wildlife viewing",
            "Solar-powered charger",
            "Reusable bamboo utensils",
            "Portable water purifier",
            "All-terrain travel backpack",
            "Organic insect-repellent lotion",
            "Durable hiking sandals",
            "Dry shampoo bar",
        ],
    ),
    RegionGuide(
        region="Russia & Eastern Europe",
        latitude_range=(40, 70),
        longitude_range=(30, 180),
        eco_tips=[
            "Travel by train where possible to reduce emissions.",
            "Stay in guesthouses or heritage hotels that support local communities.",
            "Explore local cuisine and markets to reduce reliance on imported foods.",
            "Use public transport instead of taxis in urban areas.",
            "Bring a reusable coffee cup to reduce disposable waste.",
            "Join local sustainability initiatives or cultural events.",
            "Carry a reusable water bottle and avoid buying bottled water.",
            "Support local artisans and eco-friendly souvenirs.",
            "Travel off-peak to reduce environmental stress.",
            "Practice Leave No Trace principles when exploring nature.",
        ],
        packing_list=[
            "Warm, layered clothing",
            "Reusable water bottle with built-in filter",
            "Compact travel umbrella",
            "Travel-sized eco-friendly toiletries",
            "Reusable shopping bag",
            "Portable charger with solar panel",
            "Comfortable walking shoes",
            "Insulated travel mug",
            "Reusable cutlery set",
            "Local maps and guidebooks",
        ],
    ),
    RegionGuide(
        region="Middle East",
        latitude_range=(20, 40),
        longitude_range=(30, 60),
        eco_tips=[
            "Choose eco-certified accommodations.",
            "Travel during cooler months to reduce air-conditioning use.",
            "Use public transport or shared rides in cities.",
            "Support local markets and artisanal crafts.",
            "Minimize water use in arid regions.",
            "Opt for locally sourced food.",
            "Carry a reusable water bottle and cooling towel.",
            "Respect local traditions and eco-friendly practices.",
            "Plan your route to avoid long-distance flights when possible.",
            "Join cultural tours that promote sustainability.",
        ],
        packing_list=[
            "Lightweight, breathable clothing",
            "Sun hat and sunglasses",
            "High-SPF, reef-safe sunscreen",
            "Reusable water bottle with cooling sleeve",
            "Portable fan or cooling towel",
            "Comfortable sandals",
            "Multi-plug travel adapter",
            "Eco-friendly toiletries",
            "Reusable shopping bag",
            "Travel journal",
        ],
    ),
    RegionGuide(
        region="East Asia",
        latitude_range=(20, 50),
        longitude_range=(100, 150),
        eco_tips=[
            "Use high-speed trains to reduce reliance on air travel.",
            "Stay at eco-friendly hostels or sustainable hotels.",
            "Eat local street food to reduce packaging waste.",
            "Carry a reusable bag for daily shopping.",
            "Use public bike-sharing systems where available.",
            "Support local conservation initiatives.",
            "Use digital tickets and maps to save paper.",
            "Respect nature reserves and historic sites.",
            "Join local eco-tours or cultural workshops.",
            "Avoid single-use plastics by carrying reusable utensils.",
        ],
        packing_list=[
            "Compact, foldable umbrella",
            "Moisture-wicking clothing",
            "Reusable water bottle with filter",
            "Travel adapter",
            "Portable power bank",
            "Eco-friendly travel toiletries",
            "Reusable snack pouch",
            "Comfortable walking shoes",
            "Small daypack",
            "Phrasebook or translation app",
        ],
    ),
    RegionGuide(
        region="Central Asia",
        latitude_range=(35, 50),
        longitude_range=(45, 80),
        eco_tips=[
            "Travel by shared vans or trains to reduce emissions.",
            "Stay in guesthouses that support local communities.",
            "Visit cultural sites with minimal environmental impact.",
            "Use reusable water bottles and cutlery.",
            "Plan routes that avoid backtracking.",
            "Hire local guides to learn about sustainable practices.",
            "Bring eco-friendly sunscreen and bug repellent.",
            "Buy from markets selling local, organic produce.",
            "Pack light to reduce transport fuel usage.",
            "Respect local traditions and natural landscapes.",
        ],
        packing_list=[
            "Versatile clothing for changing weather",
            "Sturdy walking shoes",
            "Reusable water bottle with filter",
            "Travel-sized eco-friendly toiletries",
            "Compact travel blanket",
            "Portable charger",
            "Reusable shopping bag",
            "Sun hat and sunglasses",
            "Local maps and guidebook",
            "Travel journal",
        ],
    ),
]


class RegionGuideCatalog:
    """First-match lookup over an ordered list of region guides."""

    def __init__(self, guides: list[RegionGuide] | None = None):
        self.guides = list(GUIDES if guides is None else guides)

    def guide_for(self, latitude: float, longitude: float) -> RegionGuide | None:
        """Return the first declared guide whose box contains the point."""
        for guide in self.guides:
            if guide.contains(latitude, longitude):
                return guide
        return None


def _sample(items: list[str], n: int, rng: random.Random | None) -> list[str]:
    rng = rng or random
    return rng.sample(items, min(max(n, 0), len(items)))


def sample_tips(
    guide: RegionGuide, n: int = DEFAULT_SAMPLE_SIZE, rng: random.Random | None = None
) -> list[str]:
    """Draw up to ``n`` eco tips in no particular order."""
    return _sample(guide.eco_tips, n, rng)


def sample_packing(
    guide: RegionGuide, n: int = DEFAULT_SAMPLE_SIZE, rng: random.Random | None = None
) -> list[str]:
    """Draw up to ``n`` packing items in no particular order."""
    return _sample(guide.packing_list, n, rng)


def enrich_pin(
    pin: Pin,
    catalog: RegionGuideCatalog | None = None,
    rng: random.Random | None = None,
) -> Pin:
    """
    Return a copy of the pin with region, tips and packing list filled in.

    Fields that are already set are left alone, so calling this again on an
    enriched pin returns an equal pin.

    Args:
        pin: The pin to enrich
        catalog: Guide catalog to look the coordinate up in
        rng: Random source for sampling (tests pass a seeded one)

    Returns:
        A new Pin; the input pin is not modified
    """
    if pin.eco_region is not None and pin.eco_tips and pin.packing_list:
        return pin

    catalog = catalog or RegionGuideCatalog()
    guide = catalog.guide_for(pin.latitude, pin.longitude)
    if guide is None:
        logger.debug("No region guide for %s at %s", pin.id, pin.coordinate)
        return pin

    update = {}
    if pin.eco_region is None:
        update["eco_region"] = guide.region
    if not pin.eco_tips:
        update["eco_tips"] = sample_tips(guide, rng=rng)
    if not pin.packing_list:
        update["packing_list"] = sample_packing(guide, rng=rng)
    return pin.model_copy(update=update, deep=True)
