import logging
import os
from typing import Dict, Optional

import requests
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# --------------------------------------------------
# Environment setup
# --------------------------------------------------

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))
load_dotenv(os.path.join(BASE_DIR, ".env"))

CLIMATIQ_URL = "https://beta3.api.climatiq.io/estimate"
TIMEOUT = 8  # seconds

# --------------------------------------------------
# Local emission factors
# --------------------------------------------------

# kg CO2e per km
LOCAL_TRAVEL_FACTORS = {
    "car": 0.17,
    "bus": 0.06,
    "train": 0.041,
    "bicycle": 0.0,
    "motorbike": 0.11,
}

# kg CO2e per kWh (India grid average)
LOCAL_ELECTRICITY_FACTOR = 0.7

# kg CO2e per day of diet
LOCAL_FOOD = {
    "veg": 2.0,
    "chicken": 6.0,
    "beef": 27.0,
}

CLIMATIQ_TRAVEL_ACTIVITIES = {
    "car": "passenger_vehicle-vehicle_type_car-fuel_source_petrol-distance_km",
}
CLIMATIQ_ELECTRICITY_ACTIVITY = "electricity-energy_source_grid_mix-energy_unit_kwh"

# --------------------------------------------------
# Climatiq
# --------------------------------------------------

def _climatiq_key() -> Optional[str]:
    return os.getenv("CLIMATIQ_API_KEY")


def _climatiq_estimate(activity_id: str, parameters: dict) -> Optional[float]:
    """Returns kg CO2e from Climatiq, or None when the call fails."""
    payload = {
        "emission_factor": {"activity_id": activity_id},
        "parameters": parameters,
    }
    headers = {
        "Authorization": f"Bearer {_climatiq_key()}",
        "Content-Type": "application/json",
    }
    try:
        r = requests.post(CLIMATIQ_URL, json=payload, headers=headers, timeout=TIMEOUT)
        if r.ok:
            data = r.json()
            if "co2e" in data:
                return float(data["co2e"])
        logger.warning("Climatiq returned %s for %s", r.status_code, activity_id)
    except (requests.RequestException, ValueError) as e:
        logger.warning("Climatiq request failed for %s: %s", activity_id, e)
    return None

# --------------------------------------------------
# Emission estimators
# --------------------------------------------------

def estimate_travel(mode: str, distance_km: float) -> float:
    mode = (mode or "car").lower()
    factor = LOCAL_TRAVEL_FACTORS.get(mode)
    if factor is None:
        raise ValueError(f"Unsupported travel mode: {mode}")

    activity_id = CLIMATIQ_TRAVEL_ACTIVITIES.get(mode)
    if _climatiq_key() and activity_id:
        co2 = _climatiq_estimate(activity_id, {"distance": distance_km, "distance_unit": "km"})
        if co2 is not None:
            return co2

    return distance_km * factor


def estimate_electricity(kwh: float, country: str = None) -> float:
    if _climatiq_key():
        params = {"energy": kwh, "energy_unit": "kWh"}
        if country:
            params["country"] = country
        co2 = _climatiq_estimate(CLIMATIQ_ELECTRICITY_ACTIVITY, params)
        if co2 is not None:
            return co2

    return kwh * LOCAL_ELECTRICITY_FACTOR


def estimate_food(category: str) -> float:
    category = (category or "veg").lower()
    return LOCAL_FOOD.get(category, LOCAL_FOOD["veg"])


def estimate_footprint(
    travel_mode: Optional[str] = None,
    distance_km: Optional[float] = None,
    kwh: Optional[float] = None,
    food_category: Optional[str] = None,
) -> Dict[str, float]:
    """
    Emissions breakdown for one footprint entry, in kg CO2e.
    Parts that were not supplied count as zero.
    """
    transport = estimate_travel(travel_mode, distance_km) if distance_km is not None else 0.0
    electricity = estimate_electricity(kwh) if kwh is not None else 0.0
    food = estimate_food(food_category) if food_category else 0.0

    return {
        "transport_emissions": round(transport, 4),
        "electricity_emissions": round(electricity, 4),
        "food_emissions": round(food, 4),
        "total_emissions": round(transport + electricity + food, 4),
    }
