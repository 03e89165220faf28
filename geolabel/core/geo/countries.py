# geolabel/core/geo/countries.py
"""
ISO 3166-1 alpha-2 code → Russian display name.

Covers the countries offered in the bot's country selector.  Codes outside
this table are displayed as-is (see ``country_display_name``).
"""
from __future__ import annotations

COUNTRY_NAMES: dict[str, str] = {
    # CIS and neighbours
    "RU": "Россия",
    "BY": "Беларусь",
    "KZ": "Казахстан",
    "UA": "Украина",
    "UZ": "Узбекистан",
    "TJ": "Таджикистан",
    "AM": "Армения",
    "GE": "Грузия",
    "AZ": "Азербайджан",
    "KG": "Киргизия",
    "MD": "Молдова",
    "TR": "Турция",
    "IL": "Израиль",
    # Europe
    "DE": "Германия",
    "LV": "Латвия",
    "LT": "Литва",
    "EE": "Эстония",
    "PL": "Польша",
    "GB": "Великобритания",
    "FR": "Франция",
    "IT": "Италия",
    "ES": "Испания",
    # Asia and Oceania
    "IN": "Индия",
    "ID": "Индонезия",
    "TH": "Таиланд",
    "VN": "Вьетнам",
    "CN": "Китай",
    "AU": "Австралия",
    # Americas
    "BR": "Бразилия",
    "MX": "Мексика",
    "AR": "Аргентина",
    "CO": "Колумбия",
    "CL": "Чили",
    "PE": "Перу",
    "CA": "Канада",
    "US": "США",
    # Africa
    "NG": "Нигерия",
    "EG": "Египет",
    "ZA": "ЮАР",
    "KE": "Кения",
    "GH": "Гана",
    "TZ": "Танзания",
    "UG": "Уганда",
    "DZ": "Алжир",
    "MA": "Марокко",
    "TN": "Тунис",
    "ET": "Эфиопия",
    "CI": "Кот-д'Ивуар",
    "CM": "Камерун",
    "SN": "Сенегал",
    "ML": "Мали",
    "BF": "Буркина-Фасо",
    "NE": "Нигер",
    "TD": "Чад",
    "SD": "Судан",
    "AO": "Ангола",
    "MZ": "Мозамбик",
    "ZM": "Замбия",
    "ZW": "Зимбабве",
    "BW": "Ботсвана",
    "NA": "Намибия",
    "RW": "Руанда",
    "GN": "Гвинея",
    "BJ": "Бенин",
    "TG": "Того",
    "LY": "Ливия",
    "LR": "Либерия",
    "MU": "Маврикий",
    "MG": "Мадагаскар",
    "CD": "Конго (ДРК)",
    "CG": "Конго",
    "GA": "Габон",
    "GQ": "Экваториальная Гвинея",
    "GM": "Гамбия",
    "SL": "Сьерра-Леоне",
    "MW": "Малави",
    "MR": "Мавритания",
    "SO": "Сомали",
    "DJ": "Джибути",
    "SZ": "Эсватини",
    "CF": "Центральноафриканская Республика",
    "KM": "Коморы",
    "LS": "Лесото",
    "GW": "Гвинея-Бисау",
    "ER": "Эритрея",
    "CV": "Кабо-Верде",
    "SC": "Сейшелы",
    "ST": "Сан-Томе и Принсипи",
    "SS": "Южный Судан",
}


def country_display_name(code: str) -> str:
    """Display name for ``code``; unmapped codes come back unchanged."""
    return COUNTRY_NAMES.get(code.upper(), code)
