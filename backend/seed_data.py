# backend/seed_data.py
import argparse
import math
import random

from config import get_settings
from database import init_db, make_engine, make_session_factory
from models.resources import Ambulance, Doctor
from services.resources import AmbulanceRepository, DoctorRepository

# Configuration
CENTER_LAT = 21.241956  # Amroli, Surat, Gujarat
CENTER_LON = 72.876412
RANDOM_RADIUS_KM = 50
RANDOM_COUNT = 5
# End Configuration

AMBULANCES = [
    ("Amroli Emergency Ambulance Service", "24/7 emergency ambulance service with advanced life support equipment.",
     "Amroli Main Road, Amroli, Surat, Gujarat 394105", 21.245000, 72.878000, "+91 261 2345678"),
    ("Surat City Ambulance", "Professional ambulance service with trained paramedics and modern medical equipment.",
     "Near Amroli Bus Stand, Surat, Gujarat", 21.238000, 72.874000, "+91 261 2345679"),
    ("Gujarat Emergency Medical Services", "Ambulance with ICU facilities, ventilator and defibrillator.",
     "Amroli Industrial Area, Surat, Gujarat", 21.243000, 72.880000, "+91 261 2345680"),
    ("Surat Emergency Care", "Advanced life support ambulance with cardiac monitoring equipment.",
     "Adajan, Surat, Gujarat 395009", 21.220000, 72.850000, "+91 261 2345683"),
    ("City Ambulance Network", "Network of ambulances covering Surat with GPS-enabled fleet management.",
     "Vesu, Surat, Gujarat 395007", 21.260000, 72.900000, "+91 261 2345684"),
    ("Surat Ambulance Services", "24/7 ambulance service with oxygen support and basic life support equipment.",
     "Katargam, Surat, Gujarat 395004", 21.210000, 72.870000, "+91 261 2345687"),
    ("Bharuch Emergency Ambulance", "Emergency ambulance service covering Bharuch district.",
     "Bharuch, Gujarat 392001", 21.700000, 72.950000, "+91 2642 2345688"),
    ("Navsari Medical Ambulance", "Ambulance service in Navsari with ICU facilities.",
     "Navsari, Gujarat 396445", 20.950000, 72.920000, "+91 2637 2345689"),
    ("Bardoli Emergency Care", "Emergency ambulance service in Bardoli serving rural and urban areas.",
     "Bardoli, Gujarat 394601", 21.120000, 73.120000, "+91 2622 2345692"),
    ("Vadodara Medical Transport", "Ambulance service in Vadodara with life support systems.",
     "Vadodara, Gujarat 390001", 22.307200, 73.181200, "+91 265 2345694"),
]

DOCTORS = [
    ("Dr. Rajesh Patel - General Physician", "Family medicine, diabetes and hypertension management.",
     "Amroli Health Center, Amroli, Surat, Gujarat 394105", 21.244000, 72.876000, "+91 261 2345701", "General Medicine"),
    ("Dr. Priya Shah - Cardiologist", "Heart diseases, angioplasty and cardiac rehabilitation.",
     "Amroli Cardiac Care, Surat, Gujarat 394105", 21.239000, 72.875000, "+91 261 2345702", "Cardiology"),
    ("Dr. Amit Desai - Pediatrician", "Childhood diseases, vaccinations and developmental issues.",
     "Amroli Children Clinic, Surat, Gujarat 394105", 21.241000, 72.877000, "+91 261 2345703", "Pediatrics"),
    ("Dr. Vikram Joshi - Orthopedic Surgeon", "Joint replacement, sports injuries and fracture treatment.",
     "Amroli Ortho Center, Surat, Gujarat 394105", 21.240000, 72.874000, "+91 261 2345705", "Orthopedics"),
    ("Dr. Anjali Gupta - Dermatologist", "Cosmetic dermatology, acne treatment and skin diseases.",
     "Adajan Skin Care, Surat, Gujarat 395009", 21.218000, 72.852000, "+91 261 2345706", "Dermatology"),
    ("Dr. Manish Agarwal - Neurologist", "Epilepsy, stroke and other neurological conditions.",
     "Vesu Neuro Clinic, Surat, Gujarat 395007", 21.258000, 72.902000, "+91 261 2345707", "Neurology"),
    ("Dr. Neha Kapoor - Psychiatrist", "Counseling and treatment for depression and anxiety.",
     "Katargam Mental Health Center, Surat, Gujarat 395004", 21.212000, 72.872000, "+91 261 2345710", "Psychiatry"),
    ("Dr. Suresh Iyer - Gastroenterologist", "Endoscopy, liver diseases and gastrointestinal disorders.",
     "Bharuch Gastro Center, Bharuch, Gujarat 392001", 21.702000, 72.952000, "+91 2642 2345711", "Gastroenterology"),
    ("Dr. Meera Nair - Pulmonologist", "Asthma, COPD and ventilator management.",
     "Navsari Respiratory Care, Navsari, Gujarat 396445", 20.952000, 72.922000, "+91 2637 2345712", "Pulmonology"),
    ("Dr. Karan Thakkar - Nephrologist", "Dialysis and chronic kidney disease management.",
     "Vadodara Kidney Care, Vadodara, Gujarat 390001", 22.309200, 73.183200, "+91 265 2345717", "Nephrology"),
]

TOWNS = ["Surat", "Bharuch", "Navsari", "Valsad", "Ankleshwar", "Bardoli", "Olpad", "Kamrej"]
SPECIALIZATIONS = ["General Medicine", "Cardiology", "Pediatrics", "ENT", "Radiology", "Surgery"]


def random_point(center_lat, center_lon, max_radius_km):
    """Random point within roughly ``max_radius_km`` of the centre."""
    # ~111 km per degree; good enough for demo data
    radius_deg = max_radius_km / 111
    angle = random.uniform(0, 2 * math.pi)
    distance = random.uniform(0, radius_deg)
    lat = center_lat + distance * math.cos(angle)
    lon = center_lon + distance * math.sin(angle)
    return round(lat, 6), round(lon, 6)


def generate_ambulances(count):
    entries = []
    for i in range(count):
        town = random.choice(TOWNS)
        lat, lon = random_point(CENTER_LAT, CENTER_LON, RANDOM_RADIUS_KM)
        entries.append({
            "title": f"Emergency Response Ambulance {i + len(AMBULANCES) + 1}",
            "description": f"Professional ambulance service in {town}. Available 24/7 with trained paramedics.",
            "location": f"{town}, Gujarat, India",
            "latitude": lat,
            "longitude": lon,
            "phone": f"+91 {random.randint(1000000000, 9999999999)}",
        })
    return entries


def generate_doctors(count):
    entries = []
    for _ in range(count):
        town = random.choice(TOWNS)
        specialization = random.choice(SPECIALIZATIONS)
        lat, lon = random_point(CENTER_LAT, CENTER_LON, RANDOM_RADIUS_KM)
        entries.append({
            "title": f"Dr. {town} Clinic - {specialization}",
            "description": f"Experienced {specialization.lower()} specialist providing care in {town}.",
            "location": f"{town} Medical Center, {town}, Gujarat, India",
            "latitude": lat,
            "longitude": lon,
            "phone": f"+91 {random.randint(1000000000, 9999999999)}",
            "specialization": specialization,
        })
    return entries


def seed(session, random_count=RANDOM_COUNT):
    """Replace every ambulance and doctor with the demo set. Returns the counts."""
    session.query(Ambulance).delete()
    session.query(Doctor).delete()
    session.commit()

    ambulances = [
        dict(title=t, description=d, location=loc, latitude=lat, longitude=lon, phone=phone)
        for t, d, loc, lat, lon, phone in AMBULANCES
    ] + generate_ambulances(random_count)
    doctors = [
        dict(title=t, description=d, location=loc, latitude=lat, longitude=lon, phone=phone, specialization=spec)
        for t, d, loc, lat, lon, phone, spec in DOCTORS
    ] + generate_doctors(random_count)

    ambulance_repo = AmbulanceRepository(session)
    for fields in ambulances:
        ambulance_repo.create(fields)

    doctor_repo = DoctorRepository(session)
    for fields in doctors:
        doctor_repo.create(fields)

    return len(ambulances), len(doctors)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed the directory with demo ambulances and doctors.")
    parser.add_argument("--random", type=int, default=RANDOM_COUNT, help="extra random entries per kind")
    args = parser.parse_args(argv)

    engine = make_engine(get_settings().DATABASE_URL)
    init_db(engine)
    session = make_session_factory(engine)()
    try:
        print("Starting database seeding...")
        n_amb, n_doc = seed(session, random_count=args.random)
        print(f"Inserted {n_amb} ambulances and {n_doc} doctors")
    finally:
        session.close()


if __name__ == "__main__":
    main()
