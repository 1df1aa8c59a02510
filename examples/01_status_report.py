"""
Builds the status pipeline, runs it over a record file and a broken variant,
and shows how the two aggregation policies report the broken one.
"""
from pathlib import Path

from lijnstatus import build_status_pipeline, evaluate, evaluate_file

HERE = Path(__file__).parent


def main():
    records = HERE / "records.txt"

    print("--- Status for records.txt ---")
    print(evaluate_file(records))

    pipeline = build_status_pipeline()
    _, context = pipeline.collect([records.read_text(encoding="utf-8")])
    print("--- Run counters ---")
    for key, value in sorted(context.to_dict().items()):
        print(f"{key}: {value}")

    broken = records.read_text(encoding="utf-8").replace("ELEMENT03=1", "ELEMENT03=one")
    print("--- Broken records ---")
    print(f"short_circuit: {evaluate(broken)}")
    print(f"corrupting: {evaluate(broken, config_path=str(HERE / 'config' / 'corrupting.yml'))}")


if __name__ == "__main__":
    main()
