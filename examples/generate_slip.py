#!/usr/bin/env python3
"""
Example of the high-level API.

Builds a request from plain records, validates it and writes the slip PDF.
"""

from pathlib import Path

from custodyslip import FileSink, build_request, generate_custody_slip, validate_request
from custodyslip.utils import setup_logging


def main():
    """Render one Inventory Custodian Slip into ./output."""

    setup_logging("INFO")

    # 1. Assemble the request from the records the application holds
    print("📋 Building request...")
    request = build_request(
        item={
            "id": 42,
            "item_code": "ICT-2025-0042",
            "name": "Laptop",
            "description": "14-inch laptop, 16GB RAM, 512GB SSD, with charger and bag",
            "quantity": 1,
            "unit_of_measure": "unit",
            "unit_price": 45000,
        },
        personnel={"first_name": "Maria", "last_name": "Santos", "position": "Teacher III"},
        school={"name": "San Pedro Elementary School"},
        form={"fund_cluster": "MOOE 2025", "estimated_useful_life": "5 YEARS"},
        issuer={"full_name": "Jose Reyes"},
    )

    # 2. Business-rule check
    validate_request(request)

    # 3. Render to PDF
    print("📄 Rendering PDF...")
    document = generate_custody_slip(request, target=FileSink(directory="output"))
    print(f"   ✅ PDF saved: output/{document.filename} ({document.page_count} page(s))")


if __name__ == "__main__":
    Path('output').mkdir(exist_ok=True)

    main()
