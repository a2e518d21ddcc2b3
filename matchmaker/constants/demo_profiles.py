"""
Demo profiles for local development and demos.

All profiles sit around San Francisco so distance preferences interact.
`max_distance` of None means no distance limit.
"""

SF_LOCATIONS = [
    {"latitude": 37.7858, "longitude": -122.4064},  # Union Square
    {"latitude": 37.7899, "longitude": -122.4044},  # North Beach
    {"latitude": 37.7949, "longitude": -122.3994},  # Embarcadero
    {"latitude": 37.7749, "longitude": -122.4194},  # Hayes Valley
    {"latitude": 37.7599, "longitude": -122.4194},  # Mission
    {"latitude": 37.8049, "longitude": -122.4194},  # Fisherman's Wharf
    {"latitude": 37.7999, "longitude": -122.4394},  # Pacific Heights
    {"latitude": 37.7749, "longitude": -122.3894},  # SOMA
    {"latitude": 37.7649, "longitude": -122.4594},  # Sunset
    {"latitude": 37.7399, "longitude": -122.3994},  # Potrero Hill
]

MAX_DISTANCES = [10, 25, 50, 100, None]

DEMO_PROFILES = [
    {
        "name": "Sophia",
        "age": 26,
        "gender": "woman",
        "bio": "Yoga teacher who spends weekends on coastal trails with a camera. Always planning the next trip.",
        "looking_for": ["man", "woman"],
        "age_range": {"min": 24, "max": 35},
        "interests": ["Yoga", "Photography", "Hiking", "Travel", "Coffee"],
        "photos": ["demo/sophia_1.jpg", "demo/sophia_2.jpg"],
    },
    {
        "name": "Luna",
        "age": 24,
        "gender": "woman",
        "bio": "Gallery curator, farmers market regular, amateur baker. Big fan of long dinners and longer conversations.",
        "looking_for": ["man", "woman"],
        "age_range": {"min": 22, "max": 30},
        "interests": ["Art", "Wine", "Cooking", "Movies"],
        "photos": ["demo/luna_1.jpg"],
    },
    {
        "name": "Aria",
        "age": 27,
        "gender": "woman",
        "bio": "Pastry chef saving up for a cafe of my own. I host a dinner party most Fridays.",
        "looking_for": ["man"],
        "age_range": {"min": 25, "max": 38},
        "interests": ["Cooking", "Travel", "Wine", "Foodie", "Nature"],
        "photos": ["demo/aria_1.jpg", "demo/aria_2.jpg"],
    },
    {
        "name": "Mia",
        "age": 25,
        "gender": "woman",
        "bio": "Physical therapist. Trail running in the morning, beach volleyball after work, movies on Sunday.",
        "looking_for": ["man"],
        "age_range": {"min": 24, "max": 34},
        "interests": ["Fitness", "Yoga", "Sports", "Movies", "Beach"],
        "photos": ["demo/mia_1.jpg"],
    },
    {
        "name": "Emma",
        "age": 29,
        "gender": "woman",
        "bio": "Environmental lawyer with a rescue dog and an overgrown balcony garden.",
        "looking_for": ["man", "woman"],
        "age_range": {"min": 27, "max": 40},
        "interests": ["Nature", "Hiking", "Pets", "Reading", "Cooking"],
        "photos": ["demo/emma_1.jpg", "demo/emma_2.jpg"],
    },
    {
        "name": "Ethan",
        "age": 28,
        "gender": "man",
        "bio": "Software engineer who brews his own coffee and climbs on weekends. Looking for a co-pilot for road trips.",
        "looking_for": ["woman"],
        "age_range": {"min": 23, "max": 33},
        "interests": ["Coffee", "Hiking", "Travel", "Gaming", "Photography"],
        "photos": ["demo/ethan_1.jpg"],
    },
    {
        "name": "Noah",
        "age": 30,
        "gender": "man",
        "bio": "Line cook turned food writer. I know every taco truck in the Mission.",
        "looking_for": ["woman"],
        "age_range": {"min": 25, "max": 36},
        "interests": ["Foodie", "Cooking", "Wine", "Music", "Reading"],
        "photos": ["demo/noah_1.jpg", "demo/noah_2.jpg"],
    },
    {
        "name": "Liam",
        "age": 26,
        "gender": "man",
        "bio": "Physio student and pickup basketball regular. Happiest near the ocean.",
        "looking_for": ["woman", "man"],
        "age_range": {"min": 22, "max": 32},
        "interests": ["Sports", "Fitness", "Beach", "Movies"],
        "photos": ["demo/liam_1.jpg"],
    },
    {
        "name": "Christian",
        "age": 29,
        "gender": "man",
        "bio": "Urban planner who cycles everywhere and volunteers at a community garden.",
        "looking_for": ["woman"],
        "age_range": {"min": 25, "max": 35},
        "interests": ["Nature", "Fitness", "Reading", "Coffee", "Art"],
        "photos": ["demo/christian_1.jpg"],
    },
    {
        "name": "Cameron",
        "age": 26,
        "gender": "man",
        "bio": "Founder at a small climate startup. Meditation retreats, whiteboards and hikes.",
        "looking_for": ["woman", "man"],
        "age_range": {"min": 23, "max": 33},
        "interests": ["Reading", "Yoga", "Coffee", "Travel", "Hiking"],
        "photos": ["demo/cameron_1.jpg", "demo/cameron_2.jpg"],
    },
]
