"""Demo records for a first run."""

from datetime import date

from medicare.schemas.appointments import AppointmentStatus
from medicare.schemas.common import RecordKind
from medicare.services.repository import RecordRepository

DEMO_DOCTORS = [
    {
        "name": "Dr. Arjun Mehra",
        "specialization": "Cardiology",
        "availability": "Available",
        "experience": 12,
        "phone": "+91 98765 11111",
    },
    {
        "name": "Dr. Priya Sharma",
        "specialization": "Neurology",
        "availability": "Busy",
        "experience": 8,
        "phone": "+91 98765 22222",
    },
    {
        "name": "Dr. Rahul Verma",
        "specialization": "Orthopedics",
        "availability": "Available",
        "experience": 15,
        "phone": "+91 98765 33333",
    },
    {
        "name": "Dr. Sneha Patel",
        "specialization": "Pediatrics",
        "availability": "On Leave",
        "experience": 6,
        "phone": "+91 98765 44444",
    },
    {
        "name": "Dr. Vikram Singh",
        "specialization": "Dermatology",
        "availability": "Available",
        "experience": 10,
        "phone": "+91 98765 55555",
    },
]

DEMO_PATIENTS = [
    {
        "name": "Aanya Krishnamurthy",
        "age": 38,
        "gender": "Female",
        "phone": "+91 99001 11111",
        "disease": "Hypertension",
        "admission_date": "2026-02-01",
        "blood_group": "A+",
        "notes": "Allergic to penicillin",
    },
    {
        "name": "Rohan Desai",
        "age": 52,
        "gender": "Male",
        "phone": "+91 99001 22222",
        "disease": "Type 2 Diabetes",
        "admission_date": "2026-02-05",
        "blood_group": "O+",
    },
    {
        "name": "Meera Joshi",
        "age": 29,
        "gender": "Female",
        "phone": "+91 99001 33333",
        "disease": "Migraine",
        "admission_date": "2026-02-10",
        "blood_group": "B-",
    },
    {
        "name": "Aryan Kapoor",
        "age": 67,
        "gender": "Male",
        "phone": "+91 99001 44444",
        "disease": "Coronary Artery",
        "admission_date": "2026-02-12",
        "blood_group": "AB+",
        "notes": "Post-op monitoring",
    },
    {
        "name": "Divya Nair",
        "age": 44,
        "gender": "Female",
        "phone": "+91 99001 55555",
        "disease": "Appendicitis",
        "admission_date": "2026-02-15",
        "blood_group": "O-",
    },
]


def seed_demo_data(repository: RecordRepository, today: date | None = None) -> dict[str, int]:
    """
    Seed demo doctors, patients and appointments.

    Only runs when both patients and doctors are empty, so saved records
    are never touched.
    """
    stats = {"doctors": 0, "patients": 0, "appointments": 0}
    if repository.count(RecordKind.PATIENTS) or repository.count(RecordKind.DOCTORS):
        return stats

    today = today or date.today()

    doctor_ids = [repository.create(RecordKind.DOCTORS, doctor) for doctor in DEMO_DOCTORS]
    patient_ids = [repository.create(RecordKind.PATIENTS, patient) for patient in DEMO_PATIENTS]

    scheduled, completed = AppointmentStatus.SCHEDULED, AppointmentStatus.COMPLETED
    # (patient index, doctor index, date, time, reason, status)
    demo_appointments = [
        (0, 0, today, "09:30", "Routine blood pressure checkup", scheduled),
        (1, 1, today, "11:00", "Diabetes management consultation", scheduled),
        (2, 2, date(2026, 2, 20), "14:30", "Follow-up on migraine medication", scheduled),
        (3, 0, date(2026, 2, 10), "10:00", "Post-operative cardiac review", completed),
    ]
    for patient, doctor, day, at, reason, status in demo_appointments:
        appointment_id = repository.create(
            RecordKind.APPOINTMENTS,
            {
                "patient_id": patient_ids[patient],
                "doctor_id": doctor_ids[doctor],
                "date": day,
                "time": at,
                "reason": reason,
            },
        )
        if status != scheduled:
            repository.update(RecordKind.APPOINTMENTS, appointment_id, {"status": status})

    stats.update(
        doctors=len(doctor_ids),
        patients=len(patient_ids),
        appointments=len(demo_appointments),
    )
    return stats
