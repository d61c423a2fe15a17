#!/usr/bin/env python3

import os
import subprocess
import sys


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def _run_example(path: str, *, args=(), input_data: bytes = b"", timeout_s: float = 10.0) -> dict:
    cmd = [sys.executable, "-m", "bfi", *args, path]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.path.join(ROOT, "src") + os.pathsep + env.get("PYTHONPATH", "")
    try:
        p = subprocess.run(
            cmd,
            input=input_data,
            capture_output=True,
            cwd=ROOT,
            env=env,
            timeout=timeout_s,
        )
        return {
            "ok": p.returncode == 0,
            "returncode": p.returncode,
            "stdout": p.stdout,
            "stderr": p.stderr.decode("utf-8", errors="replace"),
            "timeout": False,
        }
    except subprocess.TimeoutExpired as e:
        return {
            "ok": False,
            "returncode": None,
            "stdout": e.stdout or b"",
            "stderr": (e.stderr or b"").decode("utf-8", errors="replace") + "\n[TIMEOUT]",
            "timeout": True,
        }


def main() -> int:
    examples = [
        {
            "file": "examples/hello_world.bf",
            "check": lambda out: out == b"Hello World!\n",
            "expect": "exactly equals 'Hello World!\\n'",
        },
        {
            "file": "examples/echo.bf",
            "input": b"A",
            "check": lambda out: out == b"A",
            "expect": "exactly equals 'A'",
        },
        {
            "file": "examples/cat.bf",
            "args": ["--eof", "zero"],
            "input": b"copy me\n",
            "check": lambda out: out == b"copy me\n",
            "expect": "exactly equals the input",
        },
        {
            "file": "examples/add_digits.bf",
            "input": b"34",
            "check": lambda out: out == b"7\n",
            "expect": "exactly equals '7\\n'",
        },
    ]

    print("=== bfi Examples Verification ===")

    any_fail = False
    for ex in examples:
        r = _run_example(ex["file"], args=ex.get("args", ()), input_data=ex.get("input", b""))
        out = r["stdout"]

        passed = r["ok"] and ex["check"](out)
        status = "PASS" if passed else "FAIL"
        print(f"\n[{status}] {ex['file']}")

        if passed:
            continue

        any_fail = True
        print(f"Expected: {ex['expect']}")
        print(f"Return code: {r['returncode']}  Timeout: {r['timeout']}")
        print("--- program output ---")
        print(repr(out[:2000]))
        print("--- stderr ---")
        print(r["stderr"][:2000])

    if any_fail:
        print("\nSome examples FAILED.")
        return 1

    print("\nAll examples passed (output checks).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
