"""City registry: the 22 Taiwanese counties and cities known to CWA."""

from types import MappingProxyType

CITY_MAP: MappingProxyType[str, str] = MappingProxyType({
    "taipei": "臺北市",
    "newtaipei": "新北市",
    "keelung": "基隆市",
    "taoyuan": "桃園市",
    "hsinchu": "新竹市",
    "hsinchucounty": "新竹縣",
    "miaoli": "苗栗縣",
    "taichung": "臺中市",
    "changhua": "彰化縣",
    "nantou": "南投縣",
    "yunlin": "雲林縣",
    "chiayi": "嘉義市",
    "chiayicounty": "嘉義縣",
    "tainan": "臺南市",
    "kaohsiung": "高雄市",
    "pingtung": "屏東縣",
    "yilan": "宜蘭縣",
    "hualien": "花蓮縣",
    "taitung": "臺東縣",
    "penghu": "澎湖縣",
    "kinmen": "金門縣",
    "lienchiang": "連江縣",
})


def normalize_code(code: str) -> str:
    return code.lower()


def resolve(code: str) -> str | None:
    """Return the CWA location name for a city code, or None if unknown."""
    return CITY_MAP.get(normalize_code(code))


def city_codes() -> list[str]:
    return list(CITY_MAP)


def list_cities() -> list[dict[str, str]]:
    return [{"code": code, "name": name} for code, name in CITY_MAP.items()]
