from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Peran pengguna untuk otorisasi."""

    ADMIN = "admin"
    INTEGRATION = "integration"


class AttendanceStatus(str, Enum):
    """Status kehadiran yang dikenali saat impor dan saat ditampilkan."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    LEAVE = "leave"

    @classmethod
    def parse(cls, value: str) -> "AttendanceStatus":
        return cls((value or "").strip().lower())

    @property
    def label(self) -> str:
        return {
            AttendanceStatus.PRESENT: "Hadir",
            AttendanceStatus.ABSENT: "Tidak Hadir",
            AttendanceStatus.LATE: "Terlambat",
            AttendanceStatus.LEAVE: "Cuti",
        }[self]


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class CalendarEventType(str, Enum):
    PAYROLL = "payroll"
    ATTENDANCE = "attendance"
    TAX = "tax"


class BpjsType(str, Enum):
    KESEHATAN = "kesehatan"
    JHT = "jht"
    JKK = "jkk"
    JKM = "jkm"
    JP = "jp"
