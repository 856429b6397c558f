"""
Ranking benchmark for cover recognition.

Runs known cover texts through the live pipeline and reports where the
expected book lands in the ranked results.
"""

import argparse
import asyncio
import json
import os
from pathlib import Path

from dotenv import load_dotenv

# Load env vars
load_dotenv()

from coverscan.evaluation.ranking_benchmark import RankingBenchmark
from coverscan.identification.google_books import GoogleBooksClient
from coverscan.identification.service import CoverRecognitionService

# Covers the heuristics were tuned on
DEFAULT_CASES = [
    ("sleeping_murder", "SLEEPING\nMURDER\nAgatha Christie", "Sleeping Murder", "Agatha Christie"),
    ("children_of_red_peak", "THE\nCHILDREN\nOF\nRED\nPEAK\nCraig DiLouie", "The Children of Red Peak", "Craig DiLouie"),
    ("the_escape", "by Hannah Jayne\nTHE ESCAPE", "The Escape", "Hannah Jayne"),
    ("the_shining", "STEPHEN\nKING\nTHE SHINING", "The Shining", "Stephen King"),
]


async def run(cases_file: Path = None, max_results: int = 8, output: Path = None):
    client = GoogleBooksClient(api_key=os.getenv("GOOGLE_BOOKS_API_KEY"))
    service = CoverRecognitionService(client)
    benchmark = RankingBenchmark(service, max_results=max_results)

    if cases_file:
        benchmark.load_cases(cases_file)
    else:
        for case in DEFAULT_CASES:
            benchmark.add_case(*case)

    print(f"Running {len(benchmark.cases)} benchmark cases...\n")
    results = await benchmark.run()
    print(benchmark.format_report(results))

    if output:
        metrics = benchmark.compute_metrics(results)
        with open(output, "w", encoding="utf-8") as f:
            json.dump(metrics.to_dict(), f, indent=2)
        print(f"\nMetrics written to {output}")


def main():
    parser = argparse.ArgumentParser(description="Benchmark cover recognition ranking")
    parser.add_argument("--cases", type=Path, help="JSON file with benchmark cases")
    parser.add_argument("--max-results", type=int, default=8)
    parser.add_argument("--output", type=Path, help="Write summary metrics as JSON")
    args = parser.parse_args()

    asyncio.run(run(args.cases, args.max_results, args.output))


if __name__ == "__main__":
    main()
