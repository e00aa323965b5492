# run.py
# Entry point. Config and wiring only — no logic lives here.
#
# Reads OPENAI_API_KEY / OPENAI_LITE_MODEL (or OPENAI_MODEL) from the
# environment or a local .env file. Files land in ./sandbox-lite unless
# AGENT_LITE_SANDBOX_DIR says otherwise.

import sys

from agent_lite.agent import handle_run_lite

DEFAULT_PROMPT = "List files in sandbox, then write a hello.txt"


def main() -> None:
    prompt = " ".join(sys.argv[1:]) or DEFAULT_PROMPT
    status, payload = handle_run_lite({"input": prompt, "includeSteps": True})

    if status != 200:
        print(f"\n[ERROR]\n{payload['error']}\n", file=sys.stderr)
        sys.exit(1)

    print(f"\n[RESULT]\n{payload['output']}\n")


if __name__ == "__main__":
    main()
