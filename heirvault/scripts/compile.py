"""
compile.py — Build the Inheritance contract into TEAL artifacts
===============================================================
Usage:
    python scripts/compile.py [OUT_DIR]

Writes to contracts/artifacts/ unless OUT_DIR is given:
    Inheritance.approval.teal
    Inheritance.clear.teal
    Inheritance.abi.json
"""

import json
import pathlib
import sys

from contracts.inheritance import app

ARTIFACTS = pathlib.Path(__file__).parent.parent / "contracts" / "artifacts"


def render(spec) -> dict:
    """File name -> contents for one built application."""
    name = spec.contract.name
    return {
        f"{name}.approval.teal": spec.approval_program,
        f"{name}.clear.teal":    spec.clear_program,
        f"{name}.abi.json":      json.dumps(spec.contract.dictify(), indent=2),
    }


def main(out: pathlib.Path = ARTIFACTS):
    spec = app.build()
    out.mkdir(parents=True, exist_ok=True)
    for filename, text in render(spec).items():
        (out / filename).write_text(text)

    print(f"✅ {spec.contract.name} built into {out}")
    print(f"   Approval TEAL : {len(spec.approval_program.splitlines())} lines")
    for method in spec.contract.methods:
        print(f"   • {method.get_signature()}")
    return spec


if __name__ == "__main__":
    main(pathlib.Path(sys.argv[1]) if len(sys.argv) > 1 else ARTIFACTS)
