# Seed pools for a panchayat with eight wards.

BASE_COLLECTORS = [
    {"name": "Sumesh V.", "phone": "9847012345", "email": "sumesh@panchayat.in", "wards": [1, 2], "total_collections": 142},
    {"name": "Radhamani Amma", "phone": "9446054321", "email": "radhamani@panchayat.in", "wards": [3, 4], "total_collections": 128},
    {"name": "Abdul Khader", "phone": "9895098765", "email": "abdul@panchayat.in", "wards": [5, 6], "total_collections": 135},
    {"name": "Lissy Jacob", "phone": "9745011223", "email": "lissy@panchayat.in", "wards": [7, 8], "total_collections": 98},
]

BASE_HOUSEHOLDS = [
    ("Ramachandran Pillai", "Sree Nilayam, Ward 1"),
    ("Najeeb Khan", "Baitul Noor, Ward 1"),
    ("Savithri Antharjanam", "Illathu Veedu, Ward 1"),
    ("Thomas Chacko", "Puthenpurayil, Ward 2"),
    ("Khadija Beevi", "Thangal's House, Ward 2"),
    ("Sukumaran K.", "Kizhakkethil, Ward 2"),
    ("Saritha Nair", "Vrindavan, Ward 3"),
    ("Ibrahim Kutty", "Kalluvettil House, Ward 3"),
    ("Mariamma Varghese", "Bethany Villa, Ward 4"),
    ("Raghavan Kartha", "Karthika, Ward 4"),
    ("Sunitha S.", "Sivadam, Ward 5"),
    ("Muhammed Shafi", "Shafi Manzil, Ward 5"),
    ("Leela Ramakrishnan", "Krishna Kripa, Ward 6"),
    ("George Kutty", "Pulimoottil, Ward 6"),
    ("Bindu Panicker", "Panickassery, Ward 7"),
    ("Siddharthan K.P.", "K.P. Niwas, Ward 8"),
]

# Overlapping pool: every ward is covered by at least two collectors.
POOL_COLLECTORS = [
    {"name": "Sumesh V.", "phone": "9847012345", "email": "sumesh@panchayat.in", "wards": [1, 2]},
    {"name": "Radhamani Amma", "phone": "9446054321", "email": "radhamani@panchayat.in", "wards": [1, 3]},
    {"name": "Abdul Khader", "phone": "9895098765", "email": "abdul@panchayat.in", "wards": [2, 4]},
    {"name": "Lissy Jacob", "phone": "9745011223", "email": "lissy@panchayat.in", "wards": [3, 5]},
    {"name": "Vijayan K.", "phone": "9846011224", "email": "vijayan@panchayat.in", "wards": [4, 6]},
    {"name": "Saritha P.", "phone": "9447011225", "email": "saritha@panchayat.in", "wards": [5, 7]},
    {"name": "Ramesh Babu", "phone": "9847011226", "email": "ramesh@panchayat.in", "wards": [6, 8]},
    {"name": "Priya Nair", "phone": "9447011227", "email": "priya@panchayat.in", "wards": [7, 1]},
    {"name": "Jose Mathew", "phone": "9847011228", "email": "jose@panchayat.in", "wards": [8, 2]},
    {"name": "Deepa S.", "phone": "9447011229", "email": "deepa@panchayat.in", "wards": [3, 6]},
    {"name": "Anil Kumar", "phone": "9847011230", "email": "anil@panchayat.in", "wards": [4, 8]},
    {"name": "Mini Thomas", "phone": "9447011231", "email": "mini@panchayat.in", "wards": [5, 2]},
]

HOUSE_NAMES = [
    "Sree Nilayam", "Baitul Noor", "Illathu Veedu", "Puthenpurayil", "Thangal's House",
    "Kizhakkethil", "Vrindavan", "Kalluvettil", "Bethany Villa", "Karthika", "Sivadam",
    "Shafi Manzil", "Krishna Kripa", "Pulimoottil", "Panickassery", "K.P. Niwas",
    "Udayam", "Deepam", "Souparnika", "Ashraya",
]
FIRST_NAMES = [
    "Ramachandran", "Najeeb", "Savithri", "Thomas", "Khadija", "Sukumaran", "Ibrahim",
    "Mariamma", "Raghavan", "Sunitha", "Muhammed", "Leela", "George", "Bindu", "Siddharthan",
]
LAST_NAMES = [
    "Pillai", "Khan", "Antharjanam", "Chacko", "Beevi", "Nair", "Kutty", "Varghese",
    "Kartha", "Shafi", "Ramakrishnan", "Panicker",
]

WARD_COUNT = 8
POOL_HOUSEHOLD_COUNT = 60

# Rough village centre; seeded households scatter around it.
BASE_LAT = 10.85
BASE_LNG = 76.27
