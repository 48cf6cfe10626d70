#!/usr/bin/env python3

import os
import subprocess
import sys


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def _run_example(path: str, *, input_data: bytes | None, timeout_s: float = 10.0) -> dict:
    cmd = [sys.executable, "-m", "bftape", path]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [os.path.join(ROOT, "src"), env.get("PYTHONPATH")]))
    try:
        p = subprocess.run(
            cmd,
            input=input_data or b"",
            capture_output=True,
            cwd=ROOT,
            env=env,
            timeout=timeout_s,
        )
        return {
            "returncode": p.returncode,
            "stdout": p.stdout,
            "stderr": p.stderr.decode("utf-8", "replace"),
            "timeout": False,
        }
    except subprocess.TimeoutExpired as e:
        return {
            "returncode": None,
            "stdout": e.stdout or b"",
            "stderr": (e.stderr or b"").decode("utf-8", "replace") + "\n[TIMEOUT]",
            "timeout": True,
        }


EXAMPLES = [
    {"file": "examples/00_hello_world.bf", "input": None, "stdout": b"Hello World!\n", "returncode": 0},
    {"file": "examples/01_echo_three.bf", "input": b"abc", "stdout": b"abc", "returncode": 0},
    {"file": "examples/02_add_bytes.bf", "input": b"\x03\x04", "stdout": b"\x07", "returncode": 0},
    {"file": "examples/03_nested_loops.bf", "input": None, "stdout": b"\x04", "returncode": 0},
    {"file": "examples/04_zero_terminated_cat.bf", "input": b"cat\x00", "stdout": b"cat", "returncode": 0},
    {"file": "examples/05_unbalanced.bf", "input": None, "stdout": b"", "returncode": 1},
]


def main() -> int:
    failed = 0
    for ex in EXAMPLES:
        res = _run_example(ex["file"], input_data=ex["input"])
        ok = res["returncode"] == ex["returncode"] and res["stdout"] == ex["stdout"]
        mark = "✓" if ok else "✗"
        print(f"{mark} {ex['file']}")
        if not ok:
            failed += 1
            print(f"    expected rc={ex['returncode']} stdout={ex['stdout']!r}")
            print(f"    got      rc={res['returncode']} stdout={res['stdout']!r}")
            if res["stderr"]:
                print("    stderr:")
                for line in res["stderr"].splitlines():
                    print(f"      {line}")

    print(f"\n{len(EXAMPLES) - failed}/{len(EXAMPLES)} examples passed")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
