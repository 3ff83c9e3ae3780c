#!/usr/bin/env python3
"""
Example script demonstrating the usage of TypedFlagParser.

This script declares options of every kind, spread over a few help groups,
and parses the command line. Run it with --help to see the grouped listing.

    python basic_example.py --name demo -vq --workers 8 --temperature 30.5
"""

import logging

from typedflags import TypedFlagParser


def main():
    logging.basicConfig(level=logging.INFO)

    parser = TypedFlagParser(about="Run a batch of simulations")

    parser.declare_string("name", "n", "simulation", "Name of the simulation")
    parser.declare_float("temperature", "t", 27.0, "Temperature in Celsius")
    parser.declare_int("simulations", "s", 100, "Number of simulations to run")
    parser.declare_string("output-dir", "o", "/tmp/output", "Output directory path")

    parser.declare_int("workers", "w", 4, "Maximum number of worker processes", "Processing")
    parser.declare_flag("dry-run", "", "Only print what would run", "Processing")

    parser.declare_flag("verbose", "v", "Enable verbose output", "Output")
    parser.declare_flag("quiet", "q", "Suppress progress bars", "Output")

    outcome = parser.declare_flag("version", "v", "Print the version")
    if outcome.is_err():
        # -v is already taken by --verbose
        print(f"Skipping --version: {outcome.unwrap_err()}")

    values = parser.parse_args()

    print("Parsed values:")
    for name, value in values.items():
        print(f"  {name}: {value!r}")


if __name__ == "__main__":
    main()
