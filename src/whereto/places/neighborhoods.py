"""Toronto neighbourhood table and coordinate lookup.

A coordinate belongs to the first neighbourhood whose centre lies within that
neighbourhood's radius (great-circle distance).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

EARTH_RADIUS_METERS = 6_371_000.0


@dataclass(frozen=True)
class Neighborhood:
    name: str
    area: str
    lat: float
    lng: float
    radius: float  # meters
    popular_intents: tuple[str, ...] = ()


NEIGHBORHOODS: tuple[Neighborhood, ...] = (
    # Downtown
    Neighborhood("Financial District", "Downtown", 43.6480, -79.3816, 700, ("Client Dinner", "Cocktails")),
    Neighborhood("Harbourfront", "Downtown", 43.6383, -79.3855, 1000, ("Scenic Views", "Patio Weather")),
    Neighborhood("St. Lawrence Market", "Downtown", 43.6487, -79.3715, 600, ("Trending Now", "Budget Eats")),
    Neighborhood("King West", "Downtown", 43.6441, -79.3996, 700, ("Group Hang", "Cocktails")),
    Neighborhood("Distillery District", "Downtown", 43.6503, -79.3596, 500, ("Date / Chill", "Scenic Views")),
    # West End
    Neighborhood("Liberty Village", "West End", 43.6380, -79.4187, 700, ("Study / Work", "Laptop-Friendly")),
    Neighborhood("Parkdale", "West End", 43.6402, -79.4357, 800, ("Budget Eats", "Hidden Gems")),
    Neighborhood("Roncesvalles", "West End", 43.6455, -79.4501, 800, ("Coffee & Catch-Up", "Family-Friendly")),
    Neighborhood("Junction", "West End", 43.6655, -79.4655, 700, ("Locals Only", "Trending Now")),
    Neighborhood("High Park", "West End", 43.6465, -79.4637, 1000, ("Scenic Views", "Coffee & Catch-Up")),
    Neighborhood("Queen West", "West End", 43.6476, -79.3970, 700, ("Trending Now", "Date / Chill")),
    Neighborhood("Ossington", "West End", 43.6457, -79.4195, 500, ("Date / Chill", "Cocktails")),
    Neighborhood("Dundas West", "West End", 43.6498, -79.4215, 800, ("Locals Only", "Group Hang")),
    Neighborhood("Trinity Bellwoods", "West End", 43.6465, -79.4137, 600, ("Group Hang", "Coffee & Catch-Up")),
    Neighborhood("Little Italy", "West End", 43.6552, -79.4143, 600, ("Date / Chill", "Patio Weather")),
    Neighborhood("Bloor West Village", "West End", 43.6496, -79.4842, 800, ("Family-Friendly", "Coffee & Catch-Up")),
    # East End
    Neighborhood("Leslieville", "East End", 43.6625, -79.3315, 800, ("Coffee & Catch-Up", "Locals Only")),
    Neighborhood("The Beaches", "East End", 43.6710, -79.2967, 1000, ("Scenic Views", "Patio Weather")),
    Neighborhood("Greektown", "East End", 43.6780, -79.3486, 700, ("Group Hang", "Family-Friendly")),
    Neighborhood("Danforth", "East End", 43.6792, -79.3444, 900, ("Group Hang", "Budget Eats")),
    Neighborhood("Cabbagetown", "East End", 43.6657, -79.3644, 700, ("Hidden Gems", "Coffee & Catch-Up")),
    Neighborhood("Riverdale", "East End", 43.6698, -79.3508, 800, ("Scenic Views", "Locals Only")),
    # Midtown
    Neighborhood("Yorkville", "Midtown", 43.6704, -79.3910, 600, ("Date / Chill", "Trending Now")),
    Neighborhood("The Annex", "Midtown", 43.6698, -79.4075, 800, ("Study / Work", "Coffee & Catch-Up")),
    Neighborhood("Summerhill", "Midtown", 43.6823, -79.3897, 600, ("Patio Weather", "Cocktails")),
    Neighborhood("Midtown", "Midtown", 43.7058, -79.3983, 1200, ("Group Hang", "Family-Friendly")),
    Neighborhood("College Street", "Midtown", 43.6558, -79.4128, 800, ("Trending Now", "Study / Work")),
    Neighborhood("Koreatown", "Midtown", 43.6644, -79.4173, 600, ("Budget Eats", "Group Hang")),
    Neighborhood("Chinatown", "Midtown", 43.6529, -79.3980, 600, ("Budget Eats", "Hidden Gems")),
    Neighborhood("Kensington Market", "Midtown", 43.6548, -79.4007, 600, ("Budget Eats", "Coffee & Catch-Up")),
    # North York
    Neighborhood("North York Centre", "North York", 43.7673, -79.4121, 1000, ("Trending Now", "Group Hang")),
    Neighborhood("Yonge & Sheppard", "North York", 43.7615, -79.4111, 600, ("Coffee & Catch-Up", "Budget Eats")),
    Neighborhood("Yonge & Finch", "North York", 43.7801, -79.4148, 600, ("Group Hang", "Budget Eats")),
    Neighborhood("Bayview Village", "North York", 43.7688, -79.3878, 600, ("Client Dinner", "Family-Friendly")),
    Neighborhood("Don Mills", "North York", 43.7445, -79.3460, 700, ("Family-Friendly", "Coffee & Catch-Up")),
    # Scarborough
    Neighborhood("Scarborough Town Centre", "Scarborough", 43.7764, -79.2578, 700, ("Locals Only", "Family-Friendly")),
    Neighborhood("Agincourt", "Scarborough", 43.7940, -79.2810, 700, ("Budget Eats", "Hidden Gems")),
    Neighborhood("Birch Cliff", "Scarborough", 43.6920, -79.2640, 600, ("Scenic Views", "Locals Only")),
    # Etobicoke
    Neighborhood("Islington Village", "Etobicoke", 43.6490, -79.5240, 600, ("Coffee & Catch-Up", "Locals Only")),
    Neighborhood("The Kingsway", "Etobicoke", 43.6530, -79.5070, 600, ("Date / Chill", "Client Dinner")),
    Neighborhood("Mimico", "Etobicoke", 43.6150, -79.4940, 600, ("Scenic Views", "Patio Weather")),
    Neighborhood("Long Branch", "Etobicoke", 43.5930, -79.5410, 600, ("Locals Only", "Budget Eats")),
)


def haversine_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two coordinates in meters."""
    p1 = math.radians(lat1)
    p2 = math.radians(lat2)
    dp = math.radians(lat2 - lat1)
    dl = math.radians(lng2 - lng1)
    a = math.sin(dp / 2) ** 2 + math.cos(p1) * math.cos(p2) * math.sin(dl / 2) ** 2
    return EARTH_RADIUS_METERS * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def neighborhood_for(lat: float, lng: float) -> Neighborhood | None:
    """Return the neighbourhood containing the coordinate, if any."""
    for hood in NEIGHBORHOODS:
        if haversine_meters(lat, lng, hood.lat, hood.lng) <= hood.radius:
            return hood
    return None
