# main.py
import argparse
import logging

from textindex.bwt import invert
from textindex.fm_index import FMIndex
from textindex.last_first import FINDER_STRATEGIES
from textindex.lcp import LCP_ARRAY_BUILDERS
from textindex.suffix_array import SUFFIX_ARRAY_BUILDERS
from textindex.text import DEFAULT_TERMINATOR
from utils.data_loader import load_text, strip_terminator


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Suffix array, LCP array and BWT index of a text')

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('-t', '--text', help='Text to index')
    source.add_argument('-i', '--input', help='Plain or gzipped text file to index')

    parser.add_argument('-p', '--pattern', action='append', default=[], help='Pattern to locate, repeatable')
    parser.add_argument('--limit', type=int, help='Read at most this many chars from the input file')
    parser.add_argument('--terminator', default=DEFAULT_TERMINATOR, help='Terminator char')
    parser.add_argument('--suffix-array-builder', choices=sorted(SUFFIX_ARRAY_BUILDERS), default='pcs')
    parser.add_argument('--lcp-array-builder', choices=sorted(LCP_ARRAY_BUILDERS), default='kasai')
    parser.add_argument('--finder', choices=sorted(FINDER_STRATEGIES), default='precomputed')
    parser.add_argument('-k', '--sample-rate', type=int, help='Partial suffix array sampling rate')
    parser.add_argument('--sampling-mode', choices=['text', 'slot'], default='text')
    parser.add_argument('--show-arrays', action='store_true', help='Print suffix array, LCP array and BWT')
    parser.add_argument('--benchmark', action='store_true', help='Run the benchmark suite on the text')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(name)s %(levelname)s %(message)s')

    if args.input:
        text = strip_terminator(load_text(args.input, args.limit), args.terminator)
    else:
        text = args.text

    index = FMIndex(
        text,
        terminator=args.terminator,
        suffix_array_builder=args.suffix_array_builder,
        lcp_array_builder=args.lcp_array_builder,
        finder_strategy=args.finder,
        sample_rate=args.sample_rate,
        sampling_mode=args.sampling_mode)

    if args.show_arrays:
        print(f"Suffix array: {list(index.suffix_array)}")
        print(f"LCP array: {list(index.lcp_array)}")
        print(f"BWT: {index.bwt.content}")
        print(f"Inverted: {invert(index.bwt, finder=index.finder).text}")

    for pattern in args.pattern:
        occurrences = index.locate(pattern)
        print(f"Occurrences of '{pattern}': {len(occurrences)} at positions {occurrences}")
        if not occurrences:
            match = index.match(pattern)
            print(f"Longest partial match of '{pattern}': {match.matched_chars} chars")

    metrics = index.get_size_metrics()
    print(f"Original size (bits): {metrics['original_size']}")
    print(f"Index size (bits): {metrics['index_size']}")
    print(f"Space saving vs full suffix array: {metrics['space_saving']*100:.2f}%")

    if args.benchmark:
        from tests.benchmark import print_benchmark_summary, run_full_benchmark
        print_benchmark_summary(run_full_benchmark(text))


if __name__ == "__main__":
    main()
