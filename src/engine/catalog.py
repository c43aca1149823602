"""
FlagQuest - Country Catalog

Static reference data for the flag quiz. The catalog intentionally keeps the
duplicate Egypt entry found in the source data; samplers treat each row as
independently eligible.
"""

from src.engine.base import Continent, Country

_EU = Continent.EUROPE
_AS = Continent.ASIA
_AF = Continent.AFRICA
_AM = Continent.AMERICAS
_OC = Continent.OCEANIA


COUNTRIES: tuple[Country, ...] = (
    Country("es", "Spain", _EU,
            "Spain is the only European country with a land border with an African country (Morocco).", 1),
    Country("jp", "Japan", _AS,
            "Japan has more than 6,800 islands, though the four largest make up 97% of its area.", 1),
    Country("br", "Brazil", _AM,
            "Brazil is the only South American country whose official language is Portuguese.", 1),
    Country("eg", "Egypt", _AF,
            "The Great Pyramid of Giza is the only Wonder of the Ancient World still standing.", 1),
    Country("au", "Australia", _OC,
            "Australia has over 10,000 beaches; you could visit a new one every day for 27 years.", 1),
    Country("ca", "Canada", _AM,
            "Canada has more lakes than the rest of the world combined.", 1),
    Country("fr", "France", _EU,
            "France is the most visited country in the world.", 1),
    Country("in", "India", _AS,
            "Chess was invented in India more than 1,500 years ago.", 1),
    Country("mx", "Mexico", _AM,
            "The largest pyramid in the world is not in Egypt but in Mexico (Cholula).", 1),
    Country("za", "South Africa", _AF,
            "South Africa has three capitals: Pretoria, Cape Town and Bloemfontein.", 2),
    Country("kr", "South Korea", _AS,
            "South Korea traditionally counted babies as one year old at birth.", 2),
    Country("it", "Italy", _EU,
            "Italy has the largest number of UNESCO World Heritage Sites in the world.", 1),
    Country("ar", "Argentina", _AM,
            "Argentina was the first country to use fingerprints to identify a criminal.", 1),
    Country("th", "Thailand", _AS,
            "Bangkok has the longest city name in the world (Krung Thep Mahanakhon...).", 2),
    Country("gr", "Greece", _EU,
            "Greece is considered the cradle of democracy and the Olympic Games.", 1),
    Country("ke", "Kenya", _AF,
            "Kenya is famous for the annual wildebeest migration.", 2),
    Country("nz", "New Zealand", _OC,
            "New Zealand has roughly five sheep for every person.", 2),
    Country("no", "Norway", _EU,
            "Norway introduced salmon sushi to Japan in the 1980s.", 2),
    Country("vn", "Vietnam", _AS,
            "Vietnam is the second largest coffee exporter in the world.", 2),
    Country("bt", "Bhutan", _AS,
            "Bhutan is the only carbon-negative country in the world.", 3),
    Country("kz", "Kazakhstan", _AS,
            "Kazakhstan is the largest landlocked country in the world.", 3),
    Country("ls", "Lesotho", _AF,
            "Lesotho is the only country lying entirely above 1,000 metres.", 3),
    Country("vu", "Vanuatu", _OC,
            "Bungee jumping originated on Pentecost Island in Vanuatu.", 3),
    Country("sr", "Suriname", _AM,
            "Suriname is the smallest country in South America.", 3),
    Country("pt", "Portugal", _EU,
            "Portugal has had the same borders since 1139, the oldest in Europe.", 1),
    Country("ma", "Morocco", _AF,
            "Morocco is the largest sardine exporter in the world.", 2),
    Country("ch", "Switzerland", _EU,
            "Switzerland has no official capital, though Bern is the seat of government.", 2),
    Country("pe", "Peru", _AM,
            "Peru grows more than 3,000 native varieties of potato.", 1),
    Country("eg", "Egypt", _AF,
            "Egypt is home to the only Wonder of the Ancient World that still exists.", 1),
)


def by_continent(
    continent: Continent,
    catalog: tuple[Country, ...] = COUNTRIES,
) -> tuple[Country, ...]:
    """All catalog rows on a continent, in catalog order."""
    return tuple(c for c in catalog if c.continent == continent)


def find(country_id: str, catalog: tuple[Country, ...] = COUNTRIES) -> Country | None:
    """First catalog row with the given id."""
    for country in catalog:
        if country.id == country_id:
            return country
    return None
