"""
Panchangam rotation tables
Fixed lookup tables keyed by weekday or Gregorian month.

Weekday indexing throughout: Sunday=0, Monday=1, ..., Saturday=6
(``(date.weekday() + 1) % 7``).
"""

# 60-year cycle names; 1987 CE = Prabhava (cycle 1)
TAMIL_YEAR_NAMES = [
    "Prabhava", "Vibhava", "Shukla", "Pramodoota", "Prajotpatti",
    "Angirasa", "Srimukha", "Bhava", "Yuva", "Dhatu",
    "Eeshwara", "Vehudhanya", "Pramathi", "Vikrama", "Vrisha",
    "Chitrabhanu", "Svabhanu", "Tarana", "Parthiva", "Vyaya",
    "Sarvajit", "Sarvadhari", "Virodhi", "Vikruti", "Khara",
    "Nandana", "Vijaya", "Jaya", "Manmatha", "Durmukhi",
    "Hevilambi", "Vilambi", "Vikari", "Sharvari", "Plava",
    "Shubhakrut", "Shobhakrut", "Krodhi", "Vishvavasu", "Parabhava",
    "Plavanga", "Kilaka", "Saumya", "Sadharana", "Virodhikrut",
    "Paritapi", "Pramadeecha", "Ananda", "Rakshasa", "Nala",
    "Pingala", "Kalayukti", "Siddharthi", "Raudra", "Durmathi",
    "Dundubhi", "Rudhirodgari", "Raktakshi", "Krodhana", "Akshaya",
]
TAMIL_CYCLE_EPOCH_YEAR = 1987
# Tamil new year (Chithirai 1), approximate
TAMIL_NEW_YEAR = (4, 14)

# Gregorian month -> (Tamil month before threshold, threshold day, Tamil month from threshold)
# Sun's ingress into the next sign, approximate
TAMIL_MONTH_THRESHOLDS = {
    1: ("Margazhi", 14, "Thai"),
    2: ("Thai", 13, "Maasi"),
    3: ("Maasi", 14, "Panguni"),
    4: ("Panguni", 14, "Chithirai"),
    5: ("Chithirai", 15, "Vaikasi"),
    6: ("Vaikasi", 15, "Aani"),
    7: ("Aani", 17, "Aadi"),
    8: ("Aadi", 17, "Aavani"),
    9: ("Aavani", 17, "Purattasi"),
    10: ("Purattasi", 17, "Aippasi"),
    11: ("Aippasi", 16, "Karthigai"),
    12: ("Karthigai", 16, "Margazhi"),
}

# Fallback Rahukaalam by weekday: ((start_hour, start_minute), (end_hour, end_minute))
FALLBACK_RAHU_HOURS = {
    0: ((16, 30), (18, 0)),  # Sunday
    1: ((7, 30), (9, 0)),  # Monday
    2: ((15, 0), (16, 30)),  # Tuesday
    3: ((12, 0), (13, 30)),  # Wednesday
    4: ((13, 30), (15, 0)),  # Thursday
    5: ((10, 30), (12, 0)),  # Friday
    6: ((9, 0), (10, 30)),  # Saturday
}

# Each day divided into 8 parts, these indicate which part is inauspicious
RAHU_KAAL_PARTS = {
    0: 8,  # Sunday - 8th part
    1: 2,  # Monday - 2nd part
    2: 7,  # Tuesday - 7th part
    3: 5,  # Wednesday - 5th part
    4: 6,  # Thursday - 6th part
    5: 4,  # Friday - 4th part
    6: 3,  # Saturday - 3rd part
}

YAMAGANDA_PARTS = {
    0: 5,  # Sunday - 5th part
    1: 4,  # Monday - 4th part
    2: 3,  # Tuesday - 3rd part
    3: 2,  # Wednesday - 2nd part
    4: 1,  # Thursday - 1st part
    5: 7,  # Friday - 7th part
    6: 6,  # Saturday - 6th part
}

KULIGAI_PARTS = {
    0: 7,  # Sunday - 7th part
    1: 6,  # Monday - 6th part
    2: 5,  # Tuesday - 5th part
    3: 4,  # Wednesday - 4th part
    4: 3,  # Thursday - 3rd part
    5: 2,  # Friday - 2nd part
    6: 1,  # Saturday - 1st part
}

# Gowri Panchangam: state of each eighth of the day, by weekday
GOWRI_PATTERNS = {
    0: ["UTHI", "ROGAM", "VISHAM", "DHANAM", "SORAM", "LAABAM", "AMIRDHA", "SUGAM"],
    1: ["AMIRDHA", "VISHAM", "ROGAM", "DHANAM", "LAABAM", "SORAM", "UTHI", "SUGAM"],
    2: ["ROGAM", "AMIRDHA", "LAABAM", "DHANAM", "UTHI", "VISHAM", "SORAM", "SUGAM"],
    3: ["SUGAM", "SORAM", "AMIRDHA", "LAABAM", "ROGAM", "UTHI", "VISHAM", "DHANAM"],
    4: ["LAABAM", "VISHAM", "UTHI", "AMIRDHA", "SUGAM", "ROGAM", "DHANAM", "SORAM"],
    5: ["DHANAM", "LAABAM", "SUGAM", "UTHI", "ROGAM", "AMIRDHA", "VISHAM", "SORAM"],
    6: ["SORAM", "SUGAM", "ROGAM", "VISHAM", "AMIRDHA", "DHANAM", "LAABAM", "UTHI"],
}
GOWRI_AUSPICIOUS = frozenset({"AMIRDHA", "UTHI", "LAABAM", "SUGAM", "DHANAM"})

# Observance cycle used by the fallback lookahead (day-of-month mod 15)
OBSERVANCE_CYCLE = 15
EKADASI_RESIDUE = 11
PRADOSHAM_RESIDUE = 13
EKADASI_LOOKAHEAD_DAYS = 3

assert len(TAMIL_YEAR_NAMES) == 60, f"Cycle must have 60 names, got {len(TAMIL_YEAR_NAMES)}"
assert set(TAMIL_MONTH_THRESHOLDS) == set(range(1, 13)), "Thresholds must cover all 12 months"
assert all(len(p) == 8 for p in GOWRI_PATTERNS.values()), "Gowri patterns have 8 segments"
for _parts in (RAHU_KAAL_PARTS, YAMAGANDA_PARTS, KULIGAI_PARTS, FALLBACK_RAHU_HOURS, GOWRI_PATTERNS):
    assert set(_parts) == set(range(7)), "Weekday tables must cover Sunday..Saturday"
