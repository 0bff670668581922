from dataclasses import dataclass

WATER = "water"
ELECTRICITY = "electricity"


@dataclass(frozen=True)
class Appliance:
    name: str          # display name ("Washing Machine")
    series_key: str    # key in the analysis bundle ("washingClothesData")
    kind: str          # threshold / average key ("washing")


@dataclass(frozen=True)
class UtilityProfile:
    utility: str
    title: str
    unit: str
    appliances: tuple[Appliance, ...]
    thresholds: dict          # kind -> (low, medium)
    tips: tuple[str, ...]
    general_recommendations: tuple[str, ...]
    spread_advice: str
    category_advice: str      # formatted with category, pct, lower

    def threshold(self, kind: str) -> tuple[float, float]:
        return self.thresholds.get(kind, self.thresholds["total"])


WATER_PROFILE = UtilityProfile(
    utility=WATER,
    title="Water",
    unit="L",
    appliances=(
        Appliance("Shower", "bathingData", "shower"),
        Appliance("Toilet", "drinkingData", "toilet"),
        Appliance("Dishwasher", "dishwashingData", "dishwasher"),
        Appliance("Washing Machine", "washingClothesData", "washing"),
        Appliance("Sink", "cookingData", "sink"),
    ),
    thresholds={
        "total": (4000, 6000),
        "daily": (130, 200),
        "shower": (50, 80),
        "toilet": (30, 50),
        "dishwasher": (10, 15),
        "washing": (45, 60),
        "sink": (20, 35),
    },
    tips=(
        "Install a water-efficient showerhead.",
        "Limit shower time to 5 minutes.",
        "Fix leaks in fixtures.",
        "Only run full loads in washing machine and dishwasher.",
        "Turn off tap while brushing teeth or washing dishes.",
        "Install aerators on faucets.",
    ),
    general_recommendations=(
        "Consider installing water-efficient fixtures",
        "Regular maintenance of water systems to prevent leaks",
        "Consider rainwater harvesting for non-potable uses",
        "Monitor usage patterns and adjust habits accordingly",
    ),
    spread_advice="Consider spreading out water usage to avoid peak consumption periods",
    category_advice=("High {category} usage detected ({pct:.1f}%) - Consider implementing "
                     "{lower}-specific conservation measures"),
)

ELECTRICITY_PROFILE = UtilityProfile(
    utility=ELECTRICITY,
    title="Electricity",
    unit="kWh",
    appliances=(
        Appliance("Fan", "fanData", "fan"),
        Appliance("Heater", "heaterData", "heater"),
        Appliance("Refrigerator", "refrigeratorData", "refrigerator"),
        Appliance("Washing Machine", "washingMachineData", "washing"),
        Appliance("Lights", "lightsData", "lights"),
    ),
    thresholds={
        "total": (250, 500),
        "daily": (8, 15),
        "fan": (0.5, 1.2),
        "refrigerator": (1.5, 2.5),
        "washing": (1.0, 2.0),
        "heater": (3.0, 6.0),
        "lights": (0.5, 1.5),
    },
    tips=(
        "Turn off lights when not in use.",
        "Use LED bulbs.",
        "Unplug devices when not needed.",
        "Use energy-efficient appliances.",
        "Set AC to 24°C/75°F.",
        "Use cold water for laundry.",
        "Insulate your home for better heating/cooling.",
    ),
    general_recommendations=(
        "Switch to energy-efficient appliances where possible.",
        "Turn off lights and appliances when not in use.",
        "Unplug devices to avoid phantom loads.",
        "Use LED bulbs for lighting.",
        "Consider using smart plugs or timers for major appliances.",
        "Monitor usage patterns and adjust habits accordingly.",
    ),
    spread_advice="Consider spreading out electricity usage to avoid peak consumption days.",
    category_advice=("High {category} usage detected ({pct:.1f}%) - Consider implementing "
                     "{lower}-specific energy-saving measures."),
)

PROFILES = {WATER: WATER_PROFILE, ELECTRICITY: ELECTRICITY_PROFILE}


def get_profile(utility: str) -> UtilityProfile:
    try:
        return PROFILES[utility]
    except KeyError:
        raise ValueError(f"Unknown utility type: {utility!r}") from None
