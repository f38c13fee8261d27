#!/usr/bin/env python3
"""
Empirical LWE decryption failure study.

For one parameter set and a sweep of sigma values, runs independent
keygen / encrypt / decrypt rounds and compares the observed failure rate
with the Gaussian-tail estimate from ``decryption_failure_probability``.
Results are written as CSV.
"""

import sys
import json
import argparse
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
from tqdm import tqdm

from latticearith.schemes import (
    LWEParameters, LWECryptosystem, available_presets,
    decryption_failure_probability, lwe_parameters,
)


class DecryptionFailureStudy:
    """Measures how often LWE decryption returns the wrong bit."""

    def __init__(self, params: LWEParameters, trials: int = 500,
                 seed: Optional[int] = None, show_progress: bool = True):
        """
        Initialize the study.

        Args:
            params: Base parameter set; sigma is overridden per sweep point
            trials: Encrypt/decrypt rounds per sigma value, split evenly
                between bit 0 and bit 1
            seed: Seed for the shared random generator
            show_progress: Display a tqdm progress bar
        """
        if trials <= 0:
            raise ValueError(f"trials must be positive, got {trials}")
        self.params = params
        self.trials = trials
        self.rng = np.random.default_rng(seed)
        self.show_progress = show_progress
        self.logger = logging.getLogger(__name__)

    def run_single(self, sigma: float) -> dict:
        """Run all trials for one sigma and return a result row."""
        p = self.params
        params = LWEParameters(n=p.n, m=p.m, q=p.q, sigma=sigma)
        lwe = LWECryptosystem(params, rng=self.rng)

        failures = 0
        for trial in range(self.trials):
            bit = trial % 2
            sk, pk = lwe.keygen()
            if lwe.decrypt(sk, lwe.encrypt(pk, bit)) != bit:
                failures += 1

        empirical = failures / self.trials
        estimated = decryption_failure_probability(p.q, p.m, sigma)
        self.logger.info(f"  sigma={sigma:.3f}: empirical={empirical:.4f}, "
                         f"estimated={estimated:.4f}")
        return {
            'n': p.n, 'm': p.m, 'q': p.q, 'sigma': sigma,
            'trials': self.trials, 'failures': failures,
            'empirical_failure_rate': empirical,
            'estimated_failure_rate': estimated,
        }

    def run(self, sigmas: Sequence[float]) -> pd.DataFrame:
        """Run the sweep over sigma values."""
        self.logger.info(f"Running decryption failure study for n={self.params.n}, "
                         f"m={self.params.m}, q={self.params.q}")
        rows = []
        for sigma in tqdm(sigmas, desc="Sigma sweep", disable=not self.show_progress):
            rows.append(self.run_single(float(sigma)))
        return pd.DataFrame(rows)


def default_sigmas(q: int, points: int = 8) -> List[float]:
    """Sigma values from 0.25 up to q/8."""
    return [float(s) for s in np.linspace(0.25, max(q / 8, 0.5), points)]


def setup_logging(log_file: Optional[Path] = None, verbose: bool = False):
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Measure empirical LWE decryption failure rates"
    )
    parser.add_argument("--preset", type=str, choices=available_presets(), default="toy",
                        help="Base parameter set (default: toy)")
    parser.add_argument("--config", type=str, default=None,
                        help="JSON file with n, m, q, sigma (overrides --preset)")
    parser.add_argument("--n", type=int, default=None, help="Secret dimension")
    parser.add_argument("--m", type=int, default=None, help="Number of public samples")
    parser.add_argument("--q", type=int, default=None, help="Modulus")
    parser.add_argument("--sigmas", type=float, nargs="+", default=None,
                        help="Sigma values to sweep (default: 0.25 .. q/8)")
    parser.add_argument("--trials", type=int, default=500,
                        help="Rounds per sigma value (default: 500)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--output-dir", type=str, default="results",
                        help="Directory for the CSV output (default: results)")
    parser.add_argument("--log-file", type=str, default=None, help="Optional log file")
    parser.add_argument("--no-progress", action="store_true", help="Hide progress bar")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def resolve_parameters(args: argparse.Namespace) -> LWEParameters:
    """Combine preset, config file and command-line overrides."""
    if args.config is not None:
        with open(args.config, "r", encoding="utf-8") as fh:
            config = json.load(fh)
    else:
        config = lwe_parameters(args.preset).to_dict()

    for key in ('n', 'm', 'q'):
        value = getattr(args, key)
        if value is not None:
            config[key] = value
    return LWEParameters.from_dict(config)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, args.verbose)
    logger = logging.getLogger(__name__)

    params = resolve_parameters(args)
    sigmas = args.sigmas if args.sigmas is not None else default_sigmas(params.q)

    study = DecryptionFailureStudy(params, trials=args.trials, seed=args.seed,
                                   show_progress=not args.no_progress)
    results = study.run(sigmas)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / f"decryption_failure_{datetime.now():%Y%m%d_%H%M%S}.csv"
    results.to_csv(output_file, index=False)
    logger.info(f"Results saved to {output_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
