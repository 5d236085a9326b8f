#===============================================================================
#  BootWorkspace | report_window.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Optional Metro-style window listing the end-of-run results (--show-report).
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import sys

from PySide6.QtCore import Qt, QSize
from PySide6.QtGui import QColor, QFont
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QMainWindow,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from .constants import APP_TITLE, METRO_BG, STATUS_COLORS
from .orchestrator import RunSummary
from .report import HEADERS, completion_line, format_counts

WINDOW_SIZE = QSize(760, 420)


class ReportWindow(QMainWindow):
    def __init__(self, summary: RunSummary, log_path: str = "", parent=None):
        super().__init__(parent)
        self.setWindowTitle(f"{APP_TITLE} — Apps")
        self.resize(WINDOW_SIZE)

        self.setStyleSheet(f"""
        QMainWindow {{ background: {METRO_BG}; }}
        QLabel {{ color: white; font-family: "Segoe UI"; }}
        QTableWidget {{
            background: #1a1a1a;
            color: white;
            gridline-color: #2a2a2a;
            font-family: "Segoe UI";
        }}
        QHeaderView::section {{ background: #222; color: white; border: 0; padding: 4px; }}
        QPushButton {{
            font-family: "Segoe UI";
            color: white;
            background: #1a1a1a;
            border: 1px solid #2a2a2a;
            padding: 6px 10px;
        }}
        QPushButton:hover {{ background: #222; }}
        """)

        root = QWidget()
        self.setCentralWidget(root)
        layout = QVBoxLayout(root)
        layout.setContentsMargins(14, 14, 14, 14)
        layout.setSpacing(10)

        rows = summary.rows
        title = QLabel(f"<b>{completion_line(summary.cancelled)}</b>  {format_counts(summary.counts)}")
        title_font = QFont("Segoe UI", 11)
        title.setFont(title_font)
        layout.addWidget(title)

        self.table = QTableWidget(len(rows), len(HEADERS))
        self.table.setHorizontalHeaderLabels(list(HEADERS))
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setSelectionMode(QTableWidget.NoSelection)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeToContents)
        header.setStretchLastSection(True)

        for i, r in enumerate(rows):
            for col, value in enumerate((r.app, r.desktop, r.status, r.detail)):
                item = QTableWidgetItem(value)
                if col == 2:
                    item.setTextAlignment(Qt.AlignCenter)
                    item.setForeground(QColor(STATUS_COLORS.get(r.status, "#FFFFFF")))
                self.table.setItem(i, col, item)
        layout.addWidget(self.table, 1)

        footer = QHBoxLayout()
        if log_path:
            log_label = QLabel(f"Log: <code>{log_path}</code>")
            log_label.setTextInteractionFlags(Qt.TextSelectableByMouse)
            footer.addWidget(log_label)
        footer.addStretch(1)
        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.close)
        footer.addWidget(close_btn)
        layout.addLayout(footer)


def show_report_window(summary: RunSummary, log_path: str = "") -> int:
    app = QApplication.instance() or QApplication(sys.argv)
    w = ReportWindow(summary, log_path=log_path)
    w.show()
    return app.exec()
