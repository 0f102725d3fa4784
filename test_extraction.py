"""
Extraction Testing for the Image Metadata Scanner
Tests: scheme collection, per-scheme failure isolation, filesystem entries,
working folders, and the strip/scan commands with an in-memory image backend
"""

import os
import sys
import argparse
import tempfile
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

import exiftool

import cli
from classifiers import MetadataClassifier
from extractors import (
    ImageHandle,
    ExifToolImage,
    ImageReadError,
    RawMetadataCollector,
    file_entries,
)
from models import Category, DisplayHint, KeyMapping, Taxonomy
from storage import ImageFolder


class FakeImage(ImageHandle):
    """In-memory image handle; schemes listed in `failing` raise when read."""

    def __init__(self, path="", exif=None, xmp=None, iptc=None, profiles=None,
                 attributes=None, failing=()):
        self.path = path
        self.exif = exif or {}
        self.xmp = xmp
        self.iptc = iptc or {}
        self.profiles = profiles or {}
        self.attributes = attributes or {}
        self.failing = set(failing)
        self.stripped = False
        self.closed = False

    def _check(self, scheme):
        if scheme in self.failing:
            raise RuntimeError(f"{scheme} block is corrupt")

    def open(self):
        if os.path.basename(self.path).startswith("bad"):
            raise ImageReadError(f"{self.path}: Unknown file type")

    def close(self):
        self.closed = True

    def profile_names(self):
        self._check("profiles")
        return list(self.profiles)

    def get_profile(self, name):
        return self.profiles.get(name)

    def exif_tags(self):
        self._check("exif")
        return dict(self.exif)

    def xmp_text(self):
        self._check("xmp")
        return self.xmp

    def iptc_fields(self):
        self._check("iptc")
        return dict(self.iptc)

    def get_attribute(self, name):
        self._check("attributes")
        return self.attributes.get(name)

    def strip(self):
        self.stripped = True

    def write(self, output_path):
        Path(output_path).write_bytes(b"stripped" if self.stripped else b"original")


def _full_image():
    return FakeImage(
        exif={"Make": "Acme", "ISO": 3200, "GPSPosition": [1.5, 2.5]},
        xmp="<x:xmpmeta/>",
        iptc={"Keywords": ["tree", "sky"]},
        profiles={"exif": b"raw exif", "icc": b"\x00\x01", "8bim": b"abc"},
        attributes={"Make": "Acme", "Model": "", "Copyright": "Jane Doe"},
    )


def test_collect_all_schemes():
    """Test that every scheme lands in one ordered mapping"""
    print("\n=== Test 1: Collect All Schemes ===")

    raw = RawMetadataCollector().collect(_full_image())

    assert list(raw.items()) == [
        ("EXIF:Make", "Acme"),
        ("EXIF:ISO", "3200"),
        ("EXIF:GPSPosition", "1.5, 2.5"),
        ("XMP", "<x:xmpmeta/>"),
        ("IPTC:Keywords", "tree, sky"),
        ("Profile:icc", "AAE="),
        ("Profile:8bim", "YWJj"),
        ("Attribute:Make", "Acme"),
        ("Attribute:Copyright", "Jane Doe"),
    ]
    print(f"✓ PASS: {len(raw)} entries collected in scheme order")


def test_scheme_failure_is_isolated():
    """Test that a failing XMP block does not hide EXIF or later schemes"""
    print("\n=== Test 2: Scheme Failure Isolation ===")

    image = _full_image()
    image.failing = {"xmp"}

    raw = RawMetadataCollector().collect(image)

    assert "XMP" not in raw
    assert raw["EXIF:Make"] == "Acme"
    assert raw["IPTC:Keywords"] == "tree, sky"
    assert "Attribute:Copyright" in raw
    print("✓ XMP failure: EXIF, IPTC and attributes still collected")

    image.failing = {"exif", "iptc", "profiles", "attributes", "xmp"}
    assert RawMetadataCollector().collect(image) == {}
    print("✓ PASS: every scheme failing yields an empty mapping, no exception")


def test_collect_empty_image():
    """Test an image without any embedded metadata"""
    print("\n=== Test 3: Image Without Metadata ===")

    raw = RawMetadataCollector().collect(FakeImage())
    assert raw == {}
    print("✓ PASS: no entries")


def test_file_entries():
    """Test filesystem-derived entries"""
    print("\n=== Test 4: Filesystem Entries ===")

    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "holiday.jpeg"
        path.write_bytes(b"12345")

        entries = file_entries(str(path))

    assert entries == {"FileName": "holiday.jpeg", "FileSize": "5", "FileType": ".JPEG"}
    print(f"✓ PASS: {entries}")


def test_scan_image_pipeline():
    """Test collect, filesystem injection and classification together"""
    print("\n=== Test 5: Scan Pipeline ===")

    taxonomy = Taxonomy(categories=(
        Category("Camera", DisplayHint.CYAN, (KeyMapping("Make", "Maker"),)),
        Category("File", DisplayHint.DARK_GRAY, (KeyMapping("FileType", "Type"),)),
    ))

    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "a.jpg"
        path.write_bytes(b"1234")

        report = cli.scan_image(
            FakeImage(exif={"Make": "Acme"}, xmp="<x/>"),
            str(path),
            RawMetadataCollector(),
            MetadataClassifier(),
            taxonomy,
        )

    assert [(e.key, e.value) for e in report.categories[0].entries] == [("EXIF:Make", "Acme")]
    assert [(e.key, e.value) for e in report.categories[1].entries] == [("FileType", ".JPG")]
    assert [e.key for e in report.remainder] == ["XMP", "FileName", "FileSize"]
    print(f"✓ PASS: {report}")


def test_image_folder():
    """Test folder creation and top-level image listing"""
    print("\n=== Test 6: Image Folder ===")

    with tempfile.TemporaryDirectory() as temp_dir:
        folder = ImageFolder(os.path.join(temp_dir, "MSSresource"))

        assert folder.ensure_exists() is True
        assert folder.ensure_exists() is False
        print("✓ Folder created once, then reported as existing")

        for name in ["b.PNG", "a.jpg", "notes.txt", "c.webp"]:
            (Path(folder.path) / name).write_bytes(b"x")
        nested = Path(folder.path) / "nested"
        nested.mkdir()
        (nested / "d.jpg").write_bytes(b"x")

        names = [os.path.basename(p) for p in folder.list_images()]

    assert names == ["a.jpg", "b.PNG", "c.webp"]
    assert ImageFolder(os.path.join(temp_dir, "gone")).list_images() == []
    print(f"✓ PASS: {names}")


def _args(**overrides):
    values = dict(
        mode=None, input=None, output=None, taxonomy=None, report=False,
        wait=False, open_folders=False, color=False, verbose=False,
    )
    values.update(overrides)
    return argparse.Namespace(**values)


def _with_fake_images(run, **image_kwargs):
    original = cli._open_image_factory
    cli._open_image_factory = lambda config: (lambda path: FakeImage(path=path, **image_kwargs))
    try:
        run()
    finally:
        cli._open_image_factory = original


def test_strip_command():
    """Test strip mode writes a stripped copy per image and skips failures"""
    print("\n=== Test 7: Strip Command ===")

    with tempfile.TemporaryDirectory() as temp_dir:
        input_dir = Path(temp_dir) / "in"
        output_dir = Path(temp_dir) / "out"
        input_dir.mkdir()
        for name in ["a.jpg", "bad.jpg", "c.png", "readme.txt"]:
            (input_dir / name).write_bytes(b"original")

        args = _args(mode="strip", input=str(input_dir), output=str(output_dir))
        _with_fake_images(lambda: cli.cmd_strip(args, {}))

        written = sorted(p.name for p in output_dir.iterdir())
        assert written == ["a.jpg", "c.png"]
        assert (output_dir / "a.jpg").read_bytes() == b"stripped"
        assert (input_dir / "a.jpg").read_bytes() == b"original"

    print(f"✓ PASS: {written}")


def test_strip_refuses_same_folder():
    """Test strip mode never writes over its own input"""
    print("\n=== Test 8: Strip Into Input Folder ===")

    with tempfile.TemporaryDirectory() as temp_dir:
        (Path(temp_dir) / "a.jpg").write_bytes(b"original")

        args = _args(mode="strip", input=temp_dir, output=temp_dir)
        _with_fake_images(lambda: cli.cmd_strip(args, {}))

        assert (Path(temp_dir) / "a.jpg").read_bytes() == b"original"

    print("✓ PASS: input left untouched")


def test_scan_command_with_reports():
    """Test scan mode prints, writes text reports and continues past failures"""
    print("\n=== Test 9: Scan Command ===")

    with tempfile.TemporaryDirectory() as temp_dir:
        input_dir = Path(temp_dir) / "in"
        reports_dir = Path(temp_dir) / "reports"
        input_dir.mkdir()
        (input_dir / "a.jpg").write_bytes(b"1234")
        (input_dir / "bad.jpg").write_bytes(b"1234")

        taxonomy_path = Path(temp_dir) / "taxonomy.xml"
        taxonomy_path.write_text(
            '<taxonomy><category name="Camera" color="Cyan">'
            '<key raw="Make" display="Maker"/></category></taxonomy>',
            encoding="utf-8",
        )

        args = _args(mode="scan", input=str(input_dir), taxonomy=str(taxonomy_path), report=True)
        config = {"paths": {"reports_folder": str(reports_dir)}}
        _with_fake_images(lambda: cli.cmd_scan(args, config), exif={"Make": "Acme"})

        reports = sorted(p.name for p in reports_dir.iterdir())
        assert reports == ["scan_a.jpg.txt"]

        content = (reports_dir / "scan_a.jpg.txt").read_text(encoding="utf-8")
        assert "[Camera]" in content
        assert "  Maker: Acme" in content
        assert "  FileName: a.jpg" in content

    print(f"✓ PASS: {reports}")


def test_invalid_mode_is_not_an_error():
    """Test unknown or missing modes print usage and return normally"""
    print("\n=== Test 10: Invalid Mode ===")

    assert cli.main(["bogus"]) is None
    assert cli.main([]) is None
    print("✓ PASS: usage shown without error exit")


def test_exiftool_image_groups():
    """Test profile, tag and attribute lookup over ExifTool group keys"""
    print("\n=== Test 11: ExifTool Group Mapping ===")

    image = ExifToolImage("a.jpg")
    image._metadata = {
        "SourceFile": "a.jpg",
        "File:FileName": "a.jpg",
        "EXIF:Make": "Acme",
        "EXIF:ISO": 200,
        "EXIF:Copyright": "   ",
        "ICC_Profile:ProfileDescription": "sRGB",
        "XMP:Copyright": "Jane Doe",
        "XMP:Rights": "All rights reserved",
    }

    assert image.profile_names() == ["exif", "xmp", "icc"]
    assert image.exif_tags() == {"Make": "Acme", "ISO": 200, "Copyright": "   "}
    assert image.iptc_fields() == {}
    print("✓ Groups mapped to profiles, EXIF prefix sliced off")

    assert image.get_attribute("Copyright") == "Jane Doe"
    assert image.get_attribute("Make") == "Acme"
    assert image.get_attribute("Software") is None
    print("✓ Blank EXIF value skipped, XMP fallback used")

    assert image.get_profile("unknown") is None
    print("✓ PASS: ExifTool group mapping")


def test_exiftool_image_write_without_strip():
    """Test that write() copies the source when strip() was not called"""
    print("\n=== Test 12: ExifTool Write Without Strip ===")

    with tempfile.TemporaryDirectory() as temp_dir:
        source = Path(temp_dir) / "a.jpg"
        target = Path(temp_dir) / "out.jpg"
        source.write_bytes(b"original bytes")
        target.write_bytes(b"stale output")

        image = ExifToolImage(str(source))
        image.write(str(target))

        assert target.read_bytes() == b"original bytes"

    print("✓ PASS: existing output replaced with a plain copy")


class FakeExifToolHelper:
    """Stands in for exiftool.ExifToolHelper; records executed commands."""

    instances = []
    metadata = {}

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.running = False
        self.commands = []
        FakeExifToolHelper.instances.append(self)

    def run(self):
        self.running = True

    def terminate(self):
        self.running = False

    def get_metadata(self, path):
        return [dict(FakeExifToolHelper.metadata, SourceFile=path)]

    def execute(self, *params, raw_bytes=False):
        self.commands.append(params)
        if params[:2] == ("-b", "-XMP"):
            return b"<x:xmpmeta/>"
        if params[:2] == ("-b", "-ICC_Profile"):
            return b"\x00\x01"
        return b"" if raw_bytes else ""


def _with_fake_helper(run, metadata):
    original = exiftool.ExifToolHelper
    FakeExifToolHelper.instances = []
    FakeExifToolHelper.metadata = metadata
    exiftool.ExifToolHelper = FakeExifToolHelper
    try:
        run()
    finally:
        exiftool.ExifToolHelper = original


def test_exiftool_image_read_error():
    """Test that an ExifTool error for the file raises ImageReadError and releases the process"""
    print("\n=== Test 13: ExifTool Read Error ===")

    def run():
        try:
            with ExifToolImage("notes.jpg"):
                pass
        except ImageReadError as e:
            print(f"✓ Raised ImageReadError: {e}")
        else:
            raise AssertionError("expected ImageReadError")

    _with_fake_helper(run, {"ExifTool:Error": "Unknown file type"})

    assert len(FakeExifToolHelper.instances) == 1
    assert FakeExifToolHelper.instances[0].running is False
    print("✓ PASS: helper terminated after the error")


def test_exiftool_image_collect_and_strip():
    """Test a full collect and a stripped write through the ExifTool handle"""
    print("\n=== Test 14: ExifTool Collect and Strip ===")

    metadata = {
        "EXIF:Make": "Acme",
        "XMP:Creator": "Jane",
        "ICC_Profile:ProfileDescription": "sRGB",
    }

    def run():
        with tempfile.TemporaryDirectory() as temp_dir:
            source = Path(temp_dir) / "a.jpg"
            source.write_bytes(b"original")
            target = Path(temp_dir) / "clean.jpg"

            with ExifToolImage(str(source), executable="/opt/exiftool") as image:
                raw = RawMetadataCollector().collect(image)
                image.strip()
                image.write(str(target))

            assert list(raw.items()) == [
                ("EXIF:Make", "Acme"),
                ("XMP", "<x:xmpmeta/>"),
                ("Profile:icc", "AAE="),
                ("Attribute:Make", "Acme"),
            ]

            helper = FakeExifToolHelper.instances[0]
            assert helper.kwargs == {"executable": "/opt/exiftool"}
            assert helper.commands[-1] == ("-all=", "-o", str(target), str(source))
            assert helper.running is False

    _with_fake_helper(run, metadata)
    print("✓ PASS: collected through ExifTool handle, strip ran -all=")


def run_all_tests():
    """Run all extraction tests"""
    print("=" * 80)
    print("IMAGE METADATA SCANNER - EXTRACTION TESTING")
    print("=" * 80)

    tests = [
        ("Collect All Schemes", test_collect_all_schemes),
        ("Scheme Failure Isolation", test_scheme_failure_is_isolated),
        ("Image Without Metadata", test_collect_empty_image),
        ("Filesystem Entries", test_file_entries),
        ("Scan Pipeline", test_scan_image_pipeline),
        ("Image Folder", test_image_folder),
        ("Strip Command", test_strip_command),
        ("Strip Into Input Folder", test_strip_refuses_same_folder),
        ("Scan Command", test_scan_command_with_reports),
        ("Invalid Mode", test_invalid_mode_is_not_an_error),
        ("ExifTool Group Mapping", test_exiftool_image_groups),
        ("ExifTool Write Without Strip", test_exiftool_image_write_without_strip),
        ("ExifTool Read Error", test_exiftool_image_read_error),
        ("ExifTool Collect and Strip", test_exiftool_image_collect_and_strip),
    ]

    results = []
    for name, test_func in tests:
        try:
            test_func()
            results.append((name, True))
        except Exception as e:
            print(f"\n✗ EXCEPTION in {name}: {e}")
            results.append((name, False))

    print("\n" + "=" * 80)
    print("TEST SUMMARY")
    print("=" * 80)

    passed = sum(1 for _, result in results if result)
    total = len(results)

    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        print(f"{status}: {name}")

    print("=" * 80)
    print(f"Results: {passed}/{total} tests passed ({passed/total*100:.1f}%)")
    print("=" * 80)

    return passed == total


if __name__ == '__main__':
    success = run_all_tests()
    sys.exit(0 if success else 1)
