import csv
import io
import json
from datetime import datetime

from fpdf import FPDF

from storefront.models.product import Product
from storefront.models.section import Section
from storefront.schemas.product import ProductOut
from storefront.schemas.section import SectionOut
from storefront.schemas.transfer import ExportScope


def _latin1(text: str) -> str:
    # core PDF fonts only cover latin-1
    return text.encode("latin-1", "replace").decode("latin-1")


class ExportService:
    def export_csv(self, products: list[Product], sections: dict[str, str]) -> str:
        """Generate CSV string of the catalog."""
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow([
            "ID", "SKU", "Name", "Price", "Category", "Section", "Stock",
            "Active", "Featured", "Badge", "Features", "Description", "Created At",
        ])
        for p in products:
            writer.writerow([
                p.id, p.sku, p.name, f"{p.price:.2f}", p.category,
                sections.get(p.section, p.section), p.stock,
                int(p.active), int(p.featured), p.badge or "",
                "; ".join(p.features), p.description or "",
                p.created_at.isoformat() if p.created_at else "",
            ])
        return output.getvalue()

    def export_json(
        self,
        products: list[Product],
        sections: list[Section],
        scope: ExportScope = ExportScope.ALL,
    ) -> str:
        """Generate the JSON document accepted back by the import endpoint."""
        data: dict[str, list] = {}
        if scope in (ExportScope.ALL, ExportScope.PRODUCTS):
            data["products"] = [ProductOut.model_validate(p).model_dump(mode="json") for p in products]
        if scope in (ExportScope.ALL, ExportScope.SECTIONS):
            data["sections"] = [SectionOut.model_validate(s).model_dump(mode="json") for s in sections]
        return json.dumps(data, indent=2, ensure_ascii=False)

    def export_pdf(
        self,
        products: list[Product],
        sections: dict[str, str],
        title: str = "MA Furniture Price List",
    ) -> bytes:
        """Generate a PDF price list grouped by section."""
        pdf = FPDF()
        pdf.set_auto_page_break(auto=True, margin=15)
        pdf.add_page()

        pdf.set_font("Helvetica", "B", 20)
        pdf.cell(0, 15, _latin1(title), new_x="LMARGIN", new_y="NEXT", align="C")
        pdf.set_font("Helvetica", "", 10)
        pdf.cell(0, 8, f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}", new_x="LMARGIN", new_y="NEXT", align="C")
        pdf.ln(5)

        by_section: dict[str, list[Product]] = {}
        for p in products:
            name = sections.get(p.section) or "Unassigned"
            by_section.setdefault(name, []).append(p)

        for section_name, section_products in sorted(by_section.items()):
            pdf.set_font("Helvetica", "B", 14)
            pdf.cell(0, 10, _latin1(f"{section_name} ({len(section_products)} products)"), new_x="LMARGIN", new_y="NEXT")
            pdf.line(10, pdf.get_y(), 200, pdf.get_y())
            pdf.ln(3)

            for p in sorted(section_products, key=lambda x: x.name.casefold()):
                self._add_product_to_pdf(pdf, p)

            pdf.ln(5)

        return bytes(pdf.output())

    def _add_product_to_pdf(self, pdf: FPDF, product: Product) -> None:
        pdf.set_font("Helvetica", "B", 11)
        pdf.cell(140, 6, _latin1(f"{product.sku}  {product.name}"))
        pdf.cell(0, 6, f"{product.price:,.0f} RUB", new_x="LMARGIN", new_y="NEXT", align="R")

        details = [f"Category: {product.category}", f"Stock: {product.stock}"]
        if product.badge:
            details.append(product.badge)
        if not product.active:
            details.append("inactive")
        pdf.set_font("Helvetica", "I", 8)
        pdf.cell(0, 5, _latin1(" | ".join(details)), new_x="LMARGIN", new_y="NEXT")

        if product.description:
            pdf.set_font("Helvetica", "", 9)
            pdf.multi_cell(0, 5, _latin1(product.description[:200]))

        pdf.ln(2)
