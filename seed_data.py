#!/usr/bin/env python3

import sys
import os

# Add project root to path
sys.path.append(os.path.dirname(__file__))

from src.database import Base, SessionLocal, engine
from src.models import Station, Route
from src.naming import canonical_station_name

# name: (longitude, latitude, connected routes)
STATIONS = {
    "Bole": (38.7993, 8.9942, ["Bole - Megenagna", "Bole - Piassa"]),
    "Megenagna": (38.8018, 9.0205, ["Bole - Megenagna", "Megenagna - Piassa"]),
    "Arat Kilo": (38.7614, 9.0335, ["Bole - Piassa", "Megenagna - Piassa"]),
    "Piassa": (38.7519, 9.0376, ["Bole - Piassa", "Megenagna - Piassa", "Piassa - Merkato"]),
    "Merkato": (38.7372, 9.0327, ["Piassa - Merkato"]),
    "Mexico": (38.7465, 9.0106, ["Mexico - Merkato"]),
    "Stadium": (38.7578, 9.0127, ["Bole - Piassa"]),
}

# (from, to, price, intermediate stations)
ROUTES = [
    ("Bole", "Megenagna", 20.0, []),
    ("Megenagna", "Piassa", 30.0, ["Arat Kilo"]),
    ("Bole", "Piassa", 45.0, ["Stadium", "Arat Kilo"]),
    ("Piassa", "Merkato", 10.0, []),
    ("Mexico", "Merkato", 15.0, []),
]

def create_seed_data():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        print("🚀 Creating seed data for the taxi fare calculator...")

        # Clear existing data
        print("Clearing existing data...")
        db.query(Route).delete()
        db.query(Station).delete()

        print("Creating stations...")
        stations = [
            Station(
                name=canonical_station_name(name),
                location_type="Point",
                longitude=lng,
                latitude=lat,
                connected_routes=connected
            )
            for name, (lng, lat, connected) in STATIONS.items()
        ]
        db.add_all(stations)
        db.flush()

        print("Creating routes...")
        routes = [
            Route(
                from_station=canonical_station_name(from_name),
                to_station=canonical_station_name(to_name),
                price=price,
                is_direct_route=not intermediates,
                intermediate_stations=[canonical_station_name(name) for name in intermediates]
            )
            for from_name, to_name, price, intermediates in ROUTES
        ]
        db.add_all(routes)

        db.commit()
        print(f"✅ Created {len(stations)} stations and {len(routes)} routes")

    except Exception as e:
        print(f"❌ Error creating seed data: {e}")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    create_seed_data()
