#!/usr/bin/env python3
"""
reclist Solar System Demo
=========================

This script demonstrates how to:
1. Scan records from a reclist document
2. Look up fields and filter records by type
3. Modify records and write them back out

Usage:
    python examples/solar_system.py [FILE]

Without FILE a small built-in catalogue is used.
"""

import io
import logging
import sys

from reclist import Record, Scanner, Writer

CATALOGUE = """\
# Solar system objects
@star=Sun
	radius:	109.3
	mass:	333000
	descrip: "The Sun is the star at the center
		of the Solar System."

@planet=Jupiter
	radius:	10.97
	mass:	317.83
	moons:	Ganymede Callisto Io Europa

@planet=Mars
	radius: 0.5320
	mass:	0.107
	descrip: "Mars is often referred as
		the \\"Red Planet\\"."

@moon=Titan
	radius:	0.4043
	parent: Saturn
"""


def main():
    logging.basicConfig(level=logging.INFO)

    if len(sys.argv) > 1:
        stream = open(sys.argv[1], "rb")
        filename = sys.argv[1]
    else:
        stream = io.StringIO(CATALOGUE)
        filename = "<catalogue>"

    # ==========================================================================
    # 1. Scan every record
    # ==========================================================================

    with stream:
        scanner = Scanner(stream, filename=filename)
        records = list(scanner)
    if scanner.err is not None:
        print(f"Read failed: {scanner.err}", file=sys.stderr)
        return 1

    print(f"Read {len(records)} records")

    # ==========================================================================
    # 2. Query fields
    # ==========================================================================

    for record in records:
        if record.type != "planet":
            continue
        moons = record.get("moons") or "none"
        print(f"  {record.id:<10} radius={record.get('radius'):<8} moons: {moons}")

    # ==========================================================================
    # 3. Modify and write back
    # ==========================================================================

    pluto = Record("dwarf", "Pluto")
    pluto.set("radius", "0.186")
    pluto.set("descrip", "Once the ninth planet.\nReclassified in 2006.")
    records.append(pluto)

    print()
    with Writer(sys.stdout) as writer:
        writer.write_all(records)
    if writer.err is not None:
        print(f"Write failed: {writer.err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
