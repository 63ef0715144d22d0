import argparse
import json
import logging
import os
import sys
from dotenv import load_dotenv

load_dotenv()

from quizform.converter import DEFAULT_OUTPUT_DIR, convert_file, default_output_path
from quizform.errors import QuizFormError


def main(argv=None):
    parser = argparse.ArgumentParser(description="Convert a quiz document into an HTML assessment form")
    parser.add_argument("input", type=str, help="Quiz document (.docx, .pdf, .txt, .md)")
    parser.add_argument("--output", type=str, default=None, help="Output HTML file")
    parser.add_argument("--output-dir", type=str, default=DEFAULT_OUTPUT_DIR, help="Directory for timestamped output when --output is not given")
    parser.add_argument("--title", type=str, default=None, help="Page title")
    parser.add_argument("--template", type=str, default=None, help="Path to the page template")
    parser.add_argument("--json", type=str, default=None, help="Also write the parsed questions as JSON")
    parser.add_argument("--log-level", type=str, default=os.getenv("QUIZFORM_LOG_LEVEL", "WARNING"), help="Logging level")

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if not os.path.exists(args.input):
        print(f"Input file not found: {args.input}", file=sys.stderr)
        return 1

    output_path = args.output or str(default_output_path(args.output_dir))

    print(f"Converting {args.input}...")
    try:
        questions = convert_file(args.input, output_path, title=args.title, template_path=args.template)
    except (QuizFormError, OSError) as e:
        print(f"Conversion failed: {e}", file=sys.stderr)
        return 1

    choice_count = sum(1 for q in questions if q.type == "choice")
    print(f"Found {len(questions)} questions ({choice_count} choice, {len(questions) - choice_count} text).")
    print(f"Assessment saved to {output_path}")

    if args.json:
        with open(args.json, "w", encoding="utf-8") as f:
            json.dump([q.model_dump() for q in questions], f, indent=2, ensure_ascii=False)
        print(f"Questions saved to {args.json}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
