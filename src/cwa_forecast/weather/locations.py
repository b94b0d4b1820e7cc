"""Location table for Taiwan's first-level administrative divisions."""

import logging
from types import MappingProxyType
from typing import List, Mapping

from cwa_forecast.weather.errors import UnsupportedCityError

logger = logging.getLogger(__name__)


# City code -> official location name used by the CWA datastore
CITY_MAP: Mapping[str, str] = MappingProxyType({
    "taipei": "臺北市",
    "newtaipei": "新北市",
    "taoyuan": "桃園市",
    "taichung": "臺中市",
    "tainan": "臺南市",
    "kaohsiung": "高雄市",
    "keelung": "基隆市",
    "hsinchu-city": "新竹市",
    "hsinchu": "新竹縣",
    "miaoli": "苗栗縣",
    "changhua": "彰化縣",
    "nantou": "南投縣",
    "yunlin": "雲林縣",
    "chiayi-city": "嘉義市",
    "chiayi": "嘉義縣",
    "pingtung": "屏東縣",
    "yilan": "宜蘭縣",
    "hualien": "花蓮縣",
    "taitung": "臺東縣",
    "penghu": "澎湖縣",
    "kinmen": "金門縣",
    "lienchiang": "連江縣",
})


def supported_city_codes() -> List[str]:
    """Return the supported city codes in table order."""
    return list(CITY_MAP)


def resolve_city(city_code: str) -> str:
    """Resolve a city code to its CWA location name.

    Args:
        city_code: City code from the request path, matched case-insensitively

    Returns:
        Official location name, e.g. "臺北市"

    Raises:
        UnsupportedCityError: If the code is not in the table
    """
    normalized_code = city_code.strip().lower()
    location_name = CITY_MAP.get(normalized_code)

    if location_name is None:
        logger.warning(f"Unsupported city code requested: {normalized_code}")
        raise UnsupportedCityError(normalized_code, supported_city_codes())

    return location_name
