#!/usr/bin/env python3
"""
Walk a certificate through its lifecycle in memory.

Seeds the example certificates, issues a new one, hands it to a new
owner and lists everything in the world state.
"""

import logging

from artcert import Artist, AssetRegistry, MemoryWorldState


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    state = MemoryWorldState()
    registry = AssetRegistry()
    registry.initialize(state)

    artist = Artist("id-13894047849", "Tomoko Janra", "20.11.1980")
    registry.create(state, "original-cowBoy", "https://example.org/cowboy.jpg",
                    "original-cowBoy", artist, "owner1", 1962)
    registry.transfer(state, "original-cowBoy", "owner2")

    cert = registry.read(state, "original-cowBoy")
    print(f"{cert.id}: owned by {cert.owner}, produced {cert.year_of_production}")
    print()

    for cert in registry.list_all(state):
        print(f"  {cert.id:<36} {cert.title:<32} {cert.owner}")


if __name__ == "__main__":
    main()
