#!/usr/bin/env python3
"""
Example usage of the GeoStyle feature styling engine.

This script loads configuration, indexes a handful of polygons and point
markers, runs two coloring passes (the second served from the color cache)
and answers a few spatial queries.
"""

import json

from src.config import ConfigLoader
from src.exceptions import GeoStyleBaseException
from src.utils import setup_logging_from_config, get_logger, log_performance
from modules.feature_styling import Feature, FeaturePartition, FeatureStylingProcessor


POLYGON_SOURCE = """{"type": "FeatureCollection", "features": [
  {"id": "north", "type": "Feature", "geometry": {"type": "Polygon", "coordinates": [[[0, 10], [0, 20], [10, 20], [10, 10], [0, 10]]]}},
  {"id": "south", "type": "Feature", "geometry": {"type": "Polygon", "coordinates": [[[0, 0], [0, 10], [10, 10], [10, 0], [0, 0]]]}},
  {"id": "east", "type": "Feature", "geometry": {"type": "Polygon", "coordinates": [[[10, 0], [10, 20], [20, 20], [20, 0], [10, 0]]]}}
]}"""

POINT_SOURCE = "label,x,y\nhut,5,5\nbridge,15,12\nsummit,30,30\n"


def build_polygons():
    return [Feature.from_geojson(item) for item in json.loads(POLYGON_SOURCE)["features"]]


def build_points():
    rows = [line.split(",") for line in POINT_SOURCE.strip().splitlines()[1:]]
    return [
        Feature(geometry={"type": "Point", "coordinates": [float(x), float(y)]}, properties={"label": label})
        for label, x, y in rows
    ]


def main():
    """Main function demonstrating the styling engine."""
    print("GeoStyle Feature Styling Engine - Demo")
    print("=" * 60)

    # 1. Configuration and logging
    config_loader = ConfigLoader()
    try:
        environment = config_loader.resolve_environment()
        env_config = config_loader.load_environment_config(environment)
    except GeoStyleBaseException as e:
        print(f"Configuration error: {e}")
        return

    setup_logging_from_config(environment, env_config)
    logger = get_logger(__name__)
    logger.info(f"Running demo in {environment} environment")

    processor = FeatureStylingProcessor(config_loader, environment)
    if not processor.validate_configuration():
        print("Configuration invalid, see log for details")
        return

    # 2. Index features
    print("\n1. Indexing features...")
    processor.load_sources(build_polygons(), build_points(), raw_contents=[POLYGON_SOURCE, POINT_SOURCE])

    # 3. Coloring passes
    print("\n2. Coloring polygons...")

    @log_performance
    def color_pass():
        return processor.process()

    first = color_pass()
    for feature_id, color in first.metadata["colors"].items():
        print(f"   {feature_id}: {color}")

    second = color_pass()
    print(f"   Second pass cache hit: {second.metadata['coloring']['cache_valid']}")

    # 4. Spatial queries
    print("\n3. Spatial queries...")
    with processor.locked() as queries:
        store = processor.feature_store
        south = store.get_by_id(FeaturePartition.POLYGONS, "south")
        hut, bridge, summit = store.get_all_points()

        inside = [m.label for m in queries.markers_within_polygon(south)]
        print(f"   Markers in south: {inside}")
        containing = [p.id for p in queries.polygons_containing_marker(bridge)]
        print(f"   Polygons containing bridge: {containing}")
        print(f"   Area of south: {queries.area(south)}")
        print(f"   Distance hut to summit: {queries.distance(hut, summit):.2f}")
        nearest = queries.nearest_marker(hut)
        print(f"   Nearest marker to hut: {nearest.label if nearest else None}")

    # 5. Styles for the renderer
    print("\n4. Renderer styles...")
    print(f"   south: {processor.style_factory.polygon_style(south).model_dump(exclude_none=True)}")
    print(f"   marker: {processor.style_factory.marker_style().model_dump(exclude_none=True)}")

    status = processor.get_status()
    print(f"\nModule status: {status.status.value}, {status.details['cached_colors']} cached colors")

    print("\n" + "=" * 60)
    print("Demo completed successfully!")


if __name__ == "__main__":
    main()
