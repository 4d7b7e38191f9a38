import logging
import sys

import click

from gpxgraph.filters import remove_if_closer_than, smoothed_elevation
from gpxgraph.grades import flatten
from gpxgraph.parser import DEFAULT_GRADE_SEGMENT_LENGTH, GPXFileParser, GPXParserError
from gpxgraph.track import TrackGraph


def _load_track(gpx_file, grade_segment_length=DEFAULT_GRADE_SEGMENT_LENGTH):
    parser = GPXFileParser.from_path(gpx_file)
    if parser is None:
        click.echo(f"Could not read {gpx_file}", err=True)
        sys.exit(1)
    try:
        return parser.parse(grade_segment_length)
    except GPXParserError as e:
        click.echo(f"Error processing GPX file: {str(e)}", err=True)
        sys.exit(1)


@click.group(context_settings={"auto_envvar_prefix": "GPXGRAPH"})
@click.option('--verbose', '-v', is_flag=True, help='Log debug output')
def cli(verbose):
    """GPX track distance, elevation and grade analysis."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument('gpx_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--grade-segment-length', default=DEFAULT_GRADE_SEGMENT_LENGTH, type=float,
              help='Length of a grade segment in meters')
def summary(gpx_file, grade_segment_length):
    """Print title, distance, elevation gain and grade segment count of a track."""
    track = _load_track(gpx_file, grade_segment_length)
    graph = track.graph

    click.echo(f"Title: {track.title}")
    if track.description:
        click.echo(f"Description: {track.description}")
    if track.date:
        click.echo(f"Date: {track.date.isoformat()}")
    if track.keywords:
        click.echo(f"Keywords: {', '.join(track.keywords)}")
    click.echo(f"Points: {len(track.track_points)}")
    click.echo(f"Distance: {graph.total_distance_m / 1000:.2f} km")
    click.echo(f"Elevation gain: {graph.elevation_gain_m:.0f} m")
    click.echo(f"Grade segments: {len(track.grade_segments)} of {track.grade_segment_length:g} m")


@cli.command()
@click.argument('gpx_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--min-distance', default=0.0, type=float,
              help='Drop points closer than this many meters to the previous kept point')
@click.option('--smooth', default=0, type=int,
              help='Average elevation over this many neighbouring samples (0 disables)')
def profile(gpx_file, min_distance, smooth):
    """Print the distance/elevation profile as CSV."""
    track = _load_track(gpx_file)
    coords = [p.coordinate for p in track.track_points]
    if min_distance > 0:
        coords = remove_if_closer_than(coords, min_distance)
    if smooth > 0:
        coords = smoothed_elevation(coords, smooth)

    click.echo("distance_m,elevation_m")
    for dist, ele in TrackGraph.from_coordinates(coords).height_map:
        click.echo(f"{dist},{ele}")


@cli.command()
@click.argument('gpx_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--grade-segment-length', default=DEFAULT_GRADE_SEGMENT_LENGTH, type=float,
              help='Length of a grade segment in meters')
@click.option('--max-delta', default=0.01, type=float,
              help='Largest allowed grade change between neighbouring segments')
def grades(gpx_file, grade_segment_length, max_delta):
    """Print raw and flattened grade segments."""
    track = _load_track(gpx_file, grade_segment_length)
    raw = track.grade_segments

    click.echo("start_m,end_m,grade,flattened_grade,elevation_m")
    for segment, flat in zip(raw, flatten(raw, max_delta)):
        click.echo(f"{segment.start_m:.1f},{segment.end_m:.1f},{segment.grade:.4f},"
                   f"{flat.grade:.4f},{flat.elevation_at_end_m:.1f}")


if __name__ == '__main__':
    cli()
