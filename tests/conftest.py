import pytest


@pytest.fixture
def sample_gpx_content():
    return """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="Test GPX"
     xmlns="http://www.topografix.com/GPX/1/1"
     xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
     xsi:schemaLocation="http://www.topografix.com/GPX/1/1 http://www.topografix.com/GPX/1/1/gpx.xsd">
    <metadata>
        <time>2024-01-01T09:30:00Z</time>
        <keywords>cycling   hills
            leipzig</keywords>
    </metadata>
    <trk>
        <name>Test Track</name>
        <desc>Up the meridian</desc>
        <trkseg>
            <trkpt lat="0.0" lon="0.0">
                <ele>10.0</ele>
                <time>2024-01-01T10:00:00Z</time>
                <extensions><power>180</power></extensions>
            </trkpt>
            <trkpt lat="0.001" lon="0.0">
                <ele>20.0</ele>
                <time>2024-01-01T10:00:30Z</time>
                <extensions><power>210</power></extensions>
            </trkpt>
            <trkpt lat="0.002" lon="0.0">
                <ele>15.0</ele>
                <time>2024-01-01T10:01:00Z</time>
            </trkpt>
            <trkpt lat="0.003" lon="0.0">
                <ele>30.0</ele>
                <time>2024-01-01T10:01:30Z</time>
            </trkpt>
        </trkseg>
    </trk>
</gpx>"""


@pytest.fixture
def sample_gpx_file(tmp_path, sample_gpx_content):
    gpx_file = tmp_path / "test.gpx"
    gpx_file.write_text(sample_gpx_content)
    return str(gpx_file)
