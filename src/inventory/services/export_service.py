# src/inventory/services/export_service.py
from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Iterator
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from inventory.domain.models import Product

HEADER = ["id", "name", "category", "quantity", "price"]


class ExportService:
    def generate_csv(self, products: Iterable[Product]) -> Iterator[str]:
        """
        Streams the given products as CSV, one line per yielded string.
        Rows keep the order they are passed in (usually the derived view).
        """
        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(HEADER)
        yield output.getvalue()
        output.seek(0)
        output.truncate(0)

        for product in products:
            writer.writerow(
                [
                    str(product.id),
                    product.name,
                    product.category,
                    str(product.quantity),
                    str(product.price.quantize(Decimal("0.01"))),
                ]
            )
            yield output.getvalue()
            output.seek(0)
            output.truncate(0)
