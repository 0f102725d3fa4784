"""
Command-Line Interface for the Image Metadata Scanner

Provides two modes: "strip" removes all embedded metadata from the images in
the input folder and writes clean copies to the output folder; "scan" lists
each image's metadata grouped by the configured taxonomy.
"""

import os
import sys
import argparse
import logging
from typing import Callable, Optional

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from config_loader import load_config
from extractors import ImageHandle, ExifToolImage, RawMetadataCollector, file_entries
from classifiers import MetadataClassifier
from models import Taxonomy, ClassificationReport
from reporters import ValueFormatter, ConsoleReporter, TextReporter, format_report
from storage import ImageFolder
from taxonomy import TaxonomyLoader

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def scan_image(image: ImageHandle, file_path: str,
               collector: RawMetadataCollector,
               classifier: MetadataClassifier,
               taxonomy: Taxonomy) -> ClassificationReport:
    """
    Collect and classify the metadata of one opened image.

    Filesystem entries (name, size, type) are appended after the embedded
    metadata and take part in classification like any other entry.
    """
    raw = collector.collect(image)
    raw.update(file_entries(file_path))
    return classifier.classify(raw, taxonomy)


def _open_image_factory(config: dict) -> Callable[[str], ImageHandle]:
    executable = config.get('extraction', {}).get('exiftool_executable')
    return lambda path: ExifToolImage(path, executable=executable)


def _input_folder(args, config: dict) -> ImageFolder:
    paths = config.get('paths', {})
    extensions = config.get('extraction', {}).get('supported_extensions')
    return ImageFolder(args.input or paths.get('input_folder', 'MSSresource'), extensions)


def _prepare_input(args, config: dict) -> Optional[ImageFolder]:
    """Create and open the input folder, then optionally wait for the user."""
    folder = _input_folder(args, config)
    folder.ensure_exists()

    open_folders = args.open_folders and config.get('display', {}).get('open_folders', True)
    if open_folders:
        folder.open_in_file_browser()

    if args.wait and not _wait_for_ready(folder):
        logger.info("Cancelled")
        return None
    return folder


def _wait_for_ready(folder: ImageFolder) -> bool:
    print(f"Place the images to process in: {folder.path}")
    try:
        answer = input("Press Enter when ready (q to quit): ")
    except EOFError:
        return False
    return answer.strip().lower() != 'q'


def cmd_strip(args, config: dict):
    """Strip metadata from every image in the input folder."""
    folder = _prepare_input(args, config)
    if folder is None:
        return

    paths = config.get('paths', {})
    output = ImageFolder(args.output or paths.get('output_folder', 'MSSoutput'))
    if output.path == folder.path:
        logger.error("✗ Output folder must differ from the input folder")
        return
    output.ensure_exists()

    images = folder.list_images()
    if not images:
        logger.warning(f"No image files found in {folder.path}")
        return

    logger.info(f"Stripping metadata from {len(images)} images")
    open_image = _open_image_factory(config)

    processed = 0
    failed = 0

    for file_path in images:
        file_name = os.path.basename(file_path)
        try:
            with open_image(file_path) as image:
                image.strip()
                image.write(output.output_path_for(file_path))
            logger.info(f"  ✓ Processed: {file_name}")
            processed += 1
        except Exception as e:
            logger.error(f"  ✗ Error processing {file_name}: {e}")
            failed += 1

    logger.info(f"\n{'='*80}")
    logger.info("Strip complete:")
    logger.info(f"  Processed: {processed}")
    logger.info(f"  Failed: {failed}")
    logger.info(f"  Output: {output.path}")

    open_folders = args.open_folders and config.get('display', {}).get('open_folders', True)
    if processed and open_folders:
        output.open_in_file_browser()


def cmd_scan(args, config: dict):
    """Scan every image in the input folder and print its classified metadata."""
    folder = _prepare_input(args, config)
    if folder is None:
        return

    taxonomy_path = args.taxonomy or config.get('taxonomy', {}).get('path', 'taxonomy.xml')
    taxonomy = TaxonomyLoader().load(taxonomy_path)
    if taxonomy.is_empty:
        logger.warning("Taxonomy is empty - all metadata will be listed under 'Other'")

    collector = RawMetadataCollector(
        attribute_names=config.get('extraction', {}).get('attributes')
    )
    classifier = MetadataClassifier()
    formatter = ValueFormatter()

    console = ConsoleReporter.from_config(config)
    if not args.color:
        console.use_color = False

    write_reports = args.report or config.get('display', {}).get('write_text_reports', False)
    text_reporter = TextReporter.from_config(config) if write_reports else None

    images = folder.list_images()
    if not images:
        logger.warning(f"No image files found in {folder.path}")
        return

    logger.info(f"Scanning {len(images)} images")
    open_image = _open_image_factory(config)

    scanned = 0
    failed = 0

    for i, file_path in enumerate(images, 1):
        file_name = os.path.basename(file_path)
        try:
            with open_image(file_path) as image:
                report = scan_image(image, file_path, collector, classifier, taxonomy)

            lines = format_report(report, formatter, title=f"[{i}/{len(images)}] {file_name}")
            console.write_lines(lines)

            if text_reporter:
                text_reporter.generate_report(file_name, lines)
            scanned += 1
        except Exception as e:
            logger.error(f"  ✗ Error processing {file_name}: {e}")
            failed += 1

    logger.info(f"\n{'='*80}")
    logger.info("Scan complete:")
    logger.info(f"  Scanned: {scanned}")
    logger.info(f"  Failed: {failed}")


COMMANDS = {
    'strip': cmd_strip,
    'scan': cmd_scan,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Image Metadata Scanner',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  # Remove metadata from every image in MSSresource/ into MSSoutput/
  python cli.py strip

  # List metadata grouped by taxonomy.xml, and save text reports
  python cli.py scan --report

  # Use other folders and a custom taxonomy
  python cli.py scan --input ~/Pictures/upload --taxonomy my_taxonomy.xml
        '''
    )

    parser.add_argument('mode', nargs='?', help='Operating mode: strip or scan')
    parser.add_argument('--config', default='config.yaml', help='Path to config file')
    parser.add_argument('--input', help='Input folder (default from config: MSSresource)')
    parser.add_argument('--output', help='Output folder for strip (default from config: MSSoutput)')
    parser.add_argument('--taxonomy', help='Taxonomy XML file for scan (default from config)')
    parser.add_argument('--report', action='store_true', help='Write a text report per scanned image')
    parser.add_argument('--wait', action='store_true',
                        help='Wait for confirmation before processing the input folder')
    parser.add_argument('--no-open', dest='open_folders', action='store_false',
                        help='Do not open folders in the file browser')
    parser.add_argument('--no-color', dest='color', action='store_false',
                        help='Disable colored output')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    command = COMMANDS.get((args.mode or '').lower())
    if command is None:
        parser.print_usage()
        if args.mode:
            logger.warning(f"Unknown mode: {args.mode} (expected one of: {', '.join(COMMANDS)})")
        return

    try:
        config = load_config(args.config)
        command(args, config)
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
