#!/usr/bin/env python3
"""
Basic example of recordCLI usage.

This example demonstrates:
- Declaring a record dataclass with per-field CLI annotations
- Using CLI_CONSTRAINTS and PARAM_DOCS on the record class
- Parsing the command line into the record
- Saving the effective record to YAML
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import List

from recordCLI import RecordArgumentParser, RecordCLIError, export_record_to_yaml, record_to_args


@dataclass
class TrainConfig:
    """Training job configuration."""

    CLI_CONSTRAINTS = {
        'gpus': 'description:GPU ids to use;delimiter: ',
        'tags': 'shortname:t',
    }

    PARAM_DOCS = {
        'tags': 'Labels attached to the run',
        'save_to': 'Write the effective configuration to this YAML file',
    }

    model_name: str = field(metadata={'cli': 'description:name of the model to train;shortname:m;mandatory'})
    n_epochs: int = field(default=100, metadata={'cli': 'shortname:e;description:number of training epochs'})
    verbose: bool = field(default=False, metadata={'cli': 'shortname:v'})
    gpus: List[int] = field(default_factory=lambda: [0])
    tags: List[str] = field(default_factory=list)
    save_to: str = ""


def main():
    """Main entry point with CLI parsing."""
    parser = RecordArgumentParser(
        TrainConfig,
        prog="basic_example",
        description="Basic example of recordCLI",
    )

    try:
        config, overrides = parser.parse_args_with_overrides()
    except RecordCLIError as e:
        sys.stderr.write(parser.format_usage())
        sys.stderr.write(f"error: {e}\n")
        sys.exit(2)

    logging.basicConfig(level=logging.DEBUG if config.verbose else logging.INFO)

    print("=" * 60)
    print("TRAINING CONFIGURATION")
    print("=" * 60)
    print(f"Model Name:     {config.model_name}")
    print(f"Epochs:         {config.n_epochs}")
    print(f"GPUs:           {config.gpus}")
    print(f"Tags:           {config.tags}")
    print("=" * 60)
    print(f"Overrides:      {', '.join(overrides)}")
    print(f"Replay with:    {' '.join(record_to_args(config, overrides))}")

    if config.save_to:
        export_record_to_yaml(config, config.save_to, names=overrides)
        print(f"Configuration saved to {config.save_to}")


if __name__ == "__main__":
    main()


"""
Example Usage:

# Show help
python basic_example.py --help

# Required parameter only
python basic_example.py -m resnet

# Lists use ',' by default, gpus is split on whitespace
python basic_example.py -m resnet -e 10 --gpus "0 1" -t baseline,fast --save_to run.yaml
"""
