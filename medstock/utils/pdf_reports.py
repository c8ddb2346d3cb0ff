"""
PDF report generation for the inventory status and sales analytics views.
Reports are rendered from engine results, never from raw database rows.
"""
import io
from datetime import datetime
from typing import Any, List, Sequence
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib.enums import TA_CENTER

from medstock.config import settings
from medstock.schemas.dashboard import DashboardSummary
from medstock.schemas.sales import SalesAnalytics
from medstock.utils.analytics import as_decimal
from medstock.utils.dates import coerce_date
from medstock.utils.status import classify_status

HEADER_STYLE = [
    ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
    ('ALIGN', (0, 0), (-1, 0), 'CENTER'),
    ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
    ('FONTSIZE', (0, 0), (-1, 0), 9),
    ('BOTTOMPADDING', (0, 0), (-1, 0), 10),
    ('BACKGROUND', (0, 1), (-1, -1), colors.white),
    ('TEXTCOLOR', (0, 1), (-1, -1), colors.black),
    ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
    ('FONTSIZE', (0, 1), (-1, -1), 8),
    ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
    ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.whitesmoke, colors.white]),
]

class PDFReportGenerator:
    """Generate PDF reports from dashboard and analytics results."""
    
    def __init__(self, currency: str = None):
        self.currency = currency or settings.CURRENCY
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()
    
    def _setup_custom_styles(self):
        """Setup custom paragraph styles."""
        self.styles.add(ParagraphStyle(
            name='ReportTitle',
            parent=self.styles['Heading1'],
            fontSize=22,
            alignment=TA_CENTER,
            spaceAfter=24,
            textColor=colors.HexColor('#007BFF')
        ))
        
        self.styles.add(ParagraphStyle(
            name='ReportSubtitle',
            parent=self.styles['Heading2'],
            fontSize=12,
            alignment=TA_CENTER,
            spaceAfter=16,
            textColor=colors.HexColor('#666666')
        ))
        
        self.styles.add(ParagraphStyle(
            name='SectionHeader',
            parent=self.styles['Heading2'],
            fontSize=14,
            spaceBefore=16,
            spaceAfter=8,
            textColor=colors.HexColor('#6f42c1')
        ))
        
        self.styles.add(ParagraphStyle(
            name='NormalText',
            parent=self.styles['Normal'],
            fontSize=10,
            spaceAfter=6
        ))
        
        self.styles.add(ParagraphStyle(
            name='Footer',
            parent=self.styles['Normal'],
            fontSize=8,
            textColor=colors.gray,
            alignment=TA_CENTER
        ))
    
    def _money(self, value: Any) -> str:
        return f"{as_decimal(value):,.2f} {self.currency}"
    
    def _build(self, story: list) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=54,
            leftMargin=54,
            topMargin=54,
            bottomMargin=54,
            title=settings.APP_NAME,
        )
        doc.build(story)
        buffer.seek(0)
        return buffer.getvalue()
    
    def _header(self, title: str, now: datetime) -> List:
        return [
            Paragraph(title, self.styles['ReportTitle']),
            Paragraph(f"Generated: {now.strftime('%Y-%m-%d %H:%M')}", self.styles['ReportSubtitle']),
            Spacer(1, 12),
        ]
    
    def generate_inventory_report(
        self, medicines: Sequence[Any], summary: DashboardSummary, now: datetime
    ) -> bytes:
        """
        Generate inventory status PDF report.
        
        Args:
            medicines: medicine snapshot the summary was computed from
            summary: DashboardSummary for the same snapshot
            now: reference instant used for status classification
            
        Returns:
            PDF bytes
        """
        story = self._header("Inventory Status Report", now)
        
        summary_text = f"""
        <b>Summary:</b><br/>
        Total Medicines: {summary.total_medicines}<br/>
        Low Stock (&lt; 15 units): {summary.low_stock_count}<br/>
        Expiring Within 6 Months: {summary.expiring_soon_count}<br/>
        Out of Stock: {summary.out_of_stock_count}<br/>
        Inventory Value: {self._money(summary.inventory_value)}<br/>
        """
        story.append(Paragraph(summary_text, self.styles['NormalText']))
        story.append(Paragraph("Current Stock", self.styles['SectionHeader']))
        
        table_data = [['Medicine', 'Qty', 'Price', 'Stock Value', 'Expiry', 'Status']]
        status_colors = []
        for row, medicine in enumerate(medicines, start=1):
            status = classify_status(medicine.expiry_date, medicine.quantity, now)
            table_data.append([
                medicine.name,
                str(medicine.quantity),
                f"{as_decimal(medicine.price, 'price'):,.2f}",
                f"{medicine.quantity * as_decimal(medicine.price, 'price'):,.2f}",
                f"{coerce_date(medicine.expiry_date, 'expiry_date'):%Y-%m-%d}",
                status.label,
            ])
            status_colors.append(('TEXTCOLOR', (5, row), (5, row), colors.HexColor(status.color)))
        
        table = Table(table_data, colWidths=[2*inch, 0.6*inch, 0.8*inch, 1*inch, 0.9*inch, 1.6*inch])
        table.setStyle(TableStyle(
            [('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#007BFF')),
             ('ALIGN', (1, 1), (3, -1), 'RIGHT')]
            + HEADER_STYLE + status_colors
        ))
        story.append(table)
        story.append(Spacer(1, 24))
        story.append(Paragraph(f"{settings.APP_NAME} - Inventory Report", self.styles['Footer']))
        
        return self._build(story)
    
    def generate_sales_report(self, analytics: SalesAnalytics, now: datetime) -> bytes:
        """
        Generate sales analytics PDF report for one time window.
        
        Args:
            analytics: SalesAnalytics result
            now: reference instant the window was computed against
            
        Returns:
            PDF bytes
        """
        window = analytics.time_range.days
        story = self._header(f"Sales Report - Last {window} Days", now)
        
        summary_text = f"""
        <b>Summary:</b><br/>
        Total Revenue: {self._money(analytics.total_revenue)}<br/>
        Transactions: {analytics.transaction_count}<br/>
        Average Sale: {self._money(analytics.average_sale)}<br/>
        """
        story.append(Paragraph(summary_text, self.styles['NormalText']))
        
        # Daily series
        story.append(Paragraph("Daily Sales", self.styles['SectionHeader']))
        daily_data = [['Date', 'Transactions', 'Units Sold', 'Revenue']]
        for point in analytics.daily_series:
            daily_data.append([
                point.day.strftime('%Y-%m-%d'),
                str(point.transaction_count),
                str(point.total_quantity_sold),
                self._money(point.total_revenue),
            ])
        if len(daily_data) == 1:
            daily_data.append(['No sales data available', '', '', ''])
        
        daily_table = Table(daily_data, colWidths=[1.5*inch, 1.2*inch, 1.2*inch, 1.6*inch])
        daily_table.setStyle(TableStyle(
            [('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#28a745')),
             ('ALIGN', (1, 1), (-1, -1), 'RIGHT')]
            + HEADER_STYLE
        ))
        story.append(daily_table)
        
        # Top sellers
        story.append(Paragraph("Top Selling Medicines", self.styles['SectionHeader']))
        top_data = [['#', 'Medicine', 'Quantity Sold', 'Revenue']]
        for rank, seller in enumerate(analytics.top_sellers, start=1):
            top_data.append([str(rank), seller.medicine_name, str(seller.quantity_sold), self._money(seller.revenue)])
        if len(top_data) == 1:
            top_data.append(['', 'No sales data available', '', ''])
        
        top_table = Table(top_data, colWidths=[0.4*inch, 2.6*inch, 1.2*inch, 1.6*inch])
        top_table.setStyle(TableStyle(
            [('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#6f42c1')),
             ('ALIGN', (2, 1), (-1, -1), 'RIGHT')]
            + HEADER_STYLE
        ))
        story.append(top_table)
        story.append(Spacer(1, 24))
        story.append(Paragraph(f"{settings.APP_NAME} - Sales Report", self.styles['Footer']))
        
        return self._build(story)

# Create global instance
pdf_generator = PDFReportGenerator()
