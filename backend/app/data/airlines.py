"""Airline reference data — IATA codes for autocomplete and display."""

_AIRLINES: list[dict] = [
    {"code": "AA", "name": "American Airlines", "country": "USA"},
    {"code": "AC", "name": "Air Canada", "country": "Canada"},
    {"code": "AS", "name": "Alaska Airlines", "country": "USA"},
    {"code": "B6", "name": "JetBlue Airways", "country": "USA"},
    {"code": "DL", "name": "Delta Air Lines", "country": "USA"},
    {"code": "F8", "name": "Flair Airlines", "country": "Canada"},
    {"code": "F9", "name": "Frontier Airlines", "country": "USA"},
    {"code": "G4", "name": "Allegiant Air", "country": "USA"},
    {"code": "HA", "name": "Hawaiian Airlines", "country": "USA"},
    {"code": "NK", "name": "Spirit Airlines", "country": "USA"},
    {"code": "PD", "name": "Porter Airlines", "country": "Canada"},
    {"code": "QK", "name": "Jazz Aviation", "country": "Canada"},
    {"code": "RV", "name": "Air Canada Rouge", "country": "Canada"},
    {"code": "SY", "name": "Sun Country Airlines", "country": "USA"},
    {"code": "TS", "name": "Air Transat", "country": "Canada"},
    {"code": "UA", "name": "United Airlines", "country": "USA"},
    {"code": "WN", "name": "Southwest Airlines", "country": "USA"},
    {"code": "WS", "name": "WestJet", "country": "Canada"},
    {"code": "WG", "name": "Sunwing Airlines", "country": "Canada"},
    {"code": "8P", "name": "Pacific Coastal Airlines", "country": "Canada"},
    {"code": "MO", "name": "Calm Air", "country": "Canada"},
    {"code": "Y4", "name": "Volaris", "country": "Mexico"},
    {"code": "AM", "name": "Aeromexico", "country": "Mexico"},
    {"code": "4O", "name": "Interjet", "country": "Mexico"},

    # Europe
    {"code": "AF", "name": "Air France", "country": "France"},
    {"code": "AY", "name": "Finnair", "country": "Finland"},
    {"code": "AZ", "name": "ITA Airways", "country": "Italy"},
    {"code": "BA", "name": "British Airways", "country": "UK"},
    {"code": "EI", "name": "Aer Lingus", "country": "Ireland"},
    {"code": "EW", "name": "Eurowings", "country": "Germany"},
    {"code": "FR", "name": "Ryanair", "country": "Ireland"},
    {"code": "IB", "name": "Iberia", "country": "Spain"},
    {"code": "KL", "name": "KLM Royal Dutch Airlines", "country": "Netherlands"},
    {"code": "LH", "name": "Lufthansa", "country": "Germany"},
    {"code": "LO", "name": "LOT Polish Airlines", "country": "Poland"},
    {"code": "LX", "name": "Swiss International Air Lines", "country": "Switzerland"},
    {"code": "OS", "name": "Austrian Airlines", "country": "Austria"},
    {"code": "SK", "name": "SAS Scandinavian Airlines", "country": "Sweden"},
    {"code": "SN", "name": "Brussels Airlines", "country": "Belgium"},
    {"code": "TP", "name": "TAP Air Portugal", "country": "Portugal"},
    {"code": "U2", "name": "easyJet", "country": "UK"},
    {"code": "VY", "name": "Vueling", "country": "Spain"},
    {"code": "VS", "name": "Virgin Atlantic", "country": "UK"},
    {"code": "W6", "name": "Wizz Air", "country": "Hungary"},

    # Middle East
    {"code": "EK", "name": "Emirates", "country": "UAE"},
    {"code": "EY", "name": "Etihad Airways", "country": "UAE"},
    {"code": "GF", "name": "Gulf Air", "country": "Bahrain"},
    {"code": "MS", "name": "EgyptAir", "country": "Egypt"},
    {"code": "QR", "name": "Qatar Airways", "country": "Qatar"},
    {"code": "RJ", "name": "Royal Jordanian", "country": "Jordan"},
    {"code": "SV", "name": "Saudia", "country": "Saudi Arabia"},
    {"code": "TK", "name": "Turkish Airlines", "country": "Turkey"},
    {"code": "WY", "name": "Oman Air", "country": "Oman"},

    # Asia Pacific
    {"code": "AI", "name": "Air India", "country": "India"},
    {"code": "AK", "name": "AirAsia", "country": "Malaysia"},
    {"code": "BR", "name": "EVA Air", "country": "Taiwan"},
    {"code": "CA", "name": "Air China", "country": "China"},
    {"code": "CI", "name": "China Airlines", "country": "Taiwan"},
    {"code": "CX", "name": "Cathay Pacific", "country": "Hong Kong"},
    {"code": "CZ", "name": "China Southern Airlines", "country": "China"},
    {"code": "GA", "name": "Garuda Indonesia", "country": "Indonesia"},
    {"code": "JL", "name": "Japan Airlines", "country": "Japan"},
    {"code": "KE", "name": "Korean Air", "country": "South Korea"},
    {"code": "MH", "name": "Malaysia Airlines", "country": "Malaysia"},
    {"code": "MU", "name": "China Eastern Airlines", "country": "China"},
    {"code": "NH", "name": "All Nippon Airways", "country": "Japan"},
    {"code": "NZ", "name": "Air New Zealand", "country": "New Zealand"},
    {"code": "OZ", "name": "Asiana Airlines", "country": "South Korea"},
    {"code": "PR", "name": "Philippine Airlines", "country": "Philippines"},
    {"code": "QF", "name": "Qantas", "country": "Australia"},
    {"code": "SQ", "name": "Singapore Airlines", "country": "Singapore"},
    {"code": "TG", "name": "Thai Airways", "country": "Thailand"},
    {"code": "TR", "name": "Scoot", "country": "Singapore"},
    {"code": "VA", "name": "Virgin Australia", "country": "Australia"},
    {"code": "VN", "name": "Vietnam Airlines", "country": "Vietnam"},

    # Latin America & Caribbean
    {"code": "AR", "name": "Aerolineas Argentinas", "country": "Argentina"},
    {"code": "AV", "name": "Avianca", "country": "Colombia"},
    {"code": "BW", "name": "Caribbean Airlines", "country": "Trinidad"},
    {"code": "CM", "name": "Copa Airlines", "country": "Panama"},
    {"code": "G3", "name": "Gol Linhas Aereas", "country": "Brazil"},
    {"code": "JJ", "name": "LATAM Brasil", "country": "Brazil"},
    {"code": "LA", "name": "LATAM Airlines", "country": "Chile"},

    # Africa
    {"code": "ET", "name": "Ethiopian Airlines", "country": "Ethiopia"},
    {"code": "KQ", "name": "Kenya Airways", "country": "Kenya"},
    {"code": "SA", "name": "South African Airways", "country": "South Africa"},
]

# Alphabetical by name; sorted() is stable so equal names keep source order
AIRLINES: list[dict] = sorted(_AIRLINES, key=lambda a: a["name"].lower())


def search_airlines(query: str, limit: int = 10) -> list[dict]:
    """Search by code or name: exact code first, then prefix, then substring."""
    term = query.strip().lower()
    if not term:
        return AIRLINES[:limit]

    exact, starts, contains = [], [], []
    for airline in AIRLINES:
        code = airline["code"].lower()
        name = airline["name"].lower()
        if code == term:
            exact.append(airline)
        elif code.startswith(term) or name.startswith(term):
            starts.append(airline)
        elif term in code or term in name:
            contains.append(airline)

    return (exact + starts + contains)[:limit]


def get_airline_by_code(code: str) -> dict | None:
    upper = code.strip().upper()
    return next((a for a in AIRLINES if a["code"] == upper), None)


def format_airline_display(airline: dict) -> str:
    """e.g. "AC - Air Canada"."""
    return f"{airline['code']} - {airline['name']}"
