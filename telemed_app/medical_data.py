"""
medical_data.py
===============
Static reference rows for the booking service.
Seeded into the database on startup (see db.seed_reference_data) and never
modified afterwards. Row order is significant: suggestions and doctor lists
are presented in table order.
"""

SPECIALIZATIONS = [
    {"id": 1, "name": "Cardiology", "description": "Heart and cardiovascular system specialist",
     "common_conditions": ["Heart disease", "High blood pressure", "Arrhythmia"]},
    {"id": 2, "name": "Dermatology", "description": "Skin, hair, and nail specialist",
     "common_conditions": ["Acne", "Eczema", "Psoriasis"]},
    {"id": 3, "name": "Pediatrics", "description": "Children's health specialist",
     "common_conditions": ["Common cold", "Fever", "Childhood diseases"]},
    {"id": 4, "name": "Orthopedics", "description": "Bones and joints specialist",
     "common_conditions": ["Arthritis", "Back pain", "Joint pain"]},
    {"id": 5, "name": "Neurology", "description": "Brain and nervous system specialist",
     "common_conditions": ["Headaches", "Migraines", "Dizziness"]},
    {"id": 6, "name": "Psychiatry", "description": "Mental health specialist",
     "common_conditions": ["Anxiety", "Depression", "Insomnia"]},
    {"id": 7, "name": "ENT", "description": "Ear, Nose, and Throat specialist",
     "common_conditions": ["Sore throat", "Ear infections", "Sinus issues"]},
    {"id": 8, "name": "Gastroenterology", "description": "Digestive system specialist",
     "common_conditions": ["Stomach pain", "Digestive issues", "Nausea"]},
    {"id": 9, "name": "General Medicine", "description": "Treats common illnesses and conditions",
     "common_conditions": ["Influenza", "Bronchitis", "Fatigue"]},
]

SYMPTOMS = [
    {"id": 1, "name": "Chest Pain", "description": "Pain or discomfort in the chest area"},
    {"id": 2, "name": "Skin Rash", "description": "Red, itchy, or inflamed skin"},
    {"id": 3, "name": "Fever", "description": "Elevated body temperature"},
    {"id": 4, "name": "Headache", "description": "Pain in the head or neck area"},
    {"id": 5, "name": "Joint Pain", "description": "Pain in joints or bones"},
    {"id": 6, "name": "Anxiety", "description": "Feelings of worry or unease"},
    {"id": 7, "name": "Sore Throat", "description": "Pain or irritation in the throat"},
    {"id": 8, "name": "Stomach Pain", "description": "Pain or discomfort in the abdomen"},
    {"id": 9, "name": "Cough", "description": "Reflex action to clear airways"},
    {"id": 10, "name": "Fatigue", "description": "Extreme tiredness or exhaustion"},
    {"id": 11, "name": "Nausea", "description": "Feeling of sickness with an urge to vomit"},
    {"id": 12, "name": "Dizziness", "description": "Sensation of spinning or lightheadedness"},
]

DISEASES = [
    {"id": 1, "name": "Hypertension", "description": "High blood pressure",
     "common_symptoms": [1, 12], "recommended_specialization": 1},
    {"id": 2, "name": "Eczema", "description": "Chronic skin condition",
     "common_symptoms": [2], "recommended_specialization": 2},
    {"id": 3, "name": "Common Cold", "description": "Viral respiratory infection",
     "common_symptoms": [3, 7, 9], "recommended_specialization": 3},
    {"id": 4, "name": "Migraine", "description": "Severe headache condition",
     "common_symptoms": [4, 11, 12], "recommended_specialization": 5},
    {"id": 5, "name": "Arthritis", "description": "Joint inflammation",
     "common_symptoms": [5], "recommended_specialization": 4},
    {"id": 6, "name": "Anxiety Disorder", "description": "Mental health condition",
     "common_symptoms": [6, 10], "recommended_specialization": 6},
    {"id": 7, "name": "Pharyngitis", "description": "Throat inflammation",
     "common_symptoms": [7], "recommended_specialization": 7},
    {"id": 8, "name": "Gastritis", "description": "Stomach inflammation",
     "common_symptoms": [8, 11], "recommended_specialization": 8},
    {"id": 9, "name": "Influenza", "description": "Viral infection that attacks the respiratory system",
     "common_symptoms": [3, 9, 10], "recommended_specialization": 9},
]

_WEEKDAYS_MWF = ["Monday", "Wednesday", "Friday"]
_WEEKDAYS_TT = ["Tuesday", "Thursday"]
_SLOTS = ["09:00", "10:00", "11:00", "14:00", "15:00"]

DOCTORS = [
    {"id": 1, "name": "Dr. Sarah Johnson", "specialization_id": 1,
     "qualifications": ["MD", "Cardiology"], "experience": "15 years",
     "languages": ["English", "Spanish"], "rating": 4.8, "review_count": 120,
     "bio": "Experienced cardiologist specializing in preventive care",
     "consultation_fee": 150, "days": _WEEKDAYS_MWF,
     "time_slots": ["09:00", "10:00", "11:00", "14:00", "15:00", "16:00"],
     "virtual": True, "in_person": True,
     "place_id": "place_1", "address": "456 Heart Institute, Boston",
     "latitude": 42.3601, "longitude": -71.0589},
    {"id": 2, "name": "Dr. Michael Chen", "specialization_id": 2,
     "qualifications": ["MD", "Dermatology"], "experience": "12 years",
     "languages": ["English", "Mandarin"], "rating": 4.7, "review_count": 95,
     "bio": "Specialist in treating complex skin conditions",
     "consultation_fee": 130, "days": _WEEKDAYS_TT, "time_slots": _SLOTS,
     "virtual": True, "in_person": True,
     "place_id": "place_2", "address": "789 Skin Care Clinic, Chicago",
     "latitude": 41.8781, "longitude": -87.6298},
    {"id": 3, "name": "Dr. Emily Rodriguez", "specialization_id": 3,
     "qualifications": ["MD", "Pediatrics"], "experience": "10 years",
     "languages": ["English", "Spanish"], "rating": 4.9, "review_count": 150,
     "bio": "Dedicated to providing comprehensive care for children",
     "consultation_fee": 120, "days": _WEEKDAYS_MWF, "time_slots": _SLOTS,
     "virtual": True, "in_person": True,
     "place_id": "place_3", "address": "321 Children's Hospital, Los Angeles",
     "latitude": 34.0522, "longitude": -118.2437},
    {"id": 4, "name": "Dr. James Wilson", "specialization_id": 4,
     "qualifications": ["MD", "Orthopedics"], "experience": "18 years",
     "languages": ["English"], "rating": 4.8, "review_count": 110,
     "bio": "Expert in treating sports-related injuries",
     "consultation_fee": 160, "days": _WEEKDAYS_TT, "time_slots": _SLOTS,
     "virtual": False, "in_person": True,
     "place_id": "place_4", "address": "12 Sports Medicine Center, Denver",
     "latitude": 39.7392, "longitude": -104.9903},
    {"id": 5, "name": "Dr. Lisa Patel", "specialization_id": 5,
     "qualifications": ["MD", "Neurology"], "experience": "14 years",
     "languages": ["English", "Hindi"], "rating": 4.7, "review_count": 85,
     "bio": "Specialist in treating neurological disorders",
     "consultation_fee": 140, "days": _WEEKDAYS_MWF, "time_slots": _SLOTS,
     "virtual": True, "in_person": True,
     "place_id": "place_5", "address": "654 Neurology Center, San Francisco",
     "latitude": 37.7749, "longitude": -122.4194},
    {"id": 6, "name": "Dr. Robert Taylor", "specialization_id": 6,
     "qualifications": ["MD", "Psychiatry"], "experience": "16 years",
     "languages": ["English"], "rating": 4.9, "review_count": 130,
     "bio": "Expert in treating mental health conditions",
     "consultation_fee": 150, "days": _WEEKDAYS_TT, "time_slots": _SLOTS,
     "virtual": True, "in_person": True,
     "place_id": "place_6", "address": "90 Wellness Way, Seattle",
     "latitude": 47.6062, "longitude": -122.3321},
    {"id": 7, "name": "Dr. David Kim", "specialization_id": 7,
     "qualifications": ["MD", "ENT"], "experience": "13 years",
     "languages": ["English", "Korean"], "rating": 4.8, "review_count": 100,
     "bio": "Specialist in ear, nose, and throat conditions",
     "consultation_fee": 135, "days": _WEEKDAYS_MWF, "time_slots": _SLOTS,
     "virtual": True, "in_person": True,
     "place_id": "place_7", "address": "77 Harbor Clinic, San Diego",
     "latitude": 32.7157, "longitude": -117.1611},
    {"id": 8, "name": "Dr. Maria Garcia", "specialization_id": 8,
     "qualifications": ["MD", "Gastroenterology"], "experience": "15 years",
     "languages": ["English", "Spanish"], "rating": 4.7, "review_count": 115,
     "bio": "Expert in treating digestive system disorders",
     "consultation_fee": 145, "days": _WEEKDAYS_TT, "time_slots": _SLOTS,
     "virtual": True, "in_person": True,
     "place_id": "place_8", "address": "500 Digestive Health Plaza, Houston",
     "latitude": 29.7604, "longitude": -95.3698},
    {"id": 9, "name": "Dr. John Smith", "specialization_id": 9,
     "qualifications": ["MD", "MBBS", "MRCP"], "experience": "15 years",
     "languages": ["English", "Spanish"], "rating": 4.5, "review_count": 120,
     "bio": "Experienced general physician with a focus on preventive care and chronic disease management.",
     "consultation_fee": 150, "days": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"],
     "time_slots": _SLOTS, "virtual": True, "in_person": True,
     "place_id": "place_9", "address": "123 Medical Center, New York",
     "latitude": 40.7128, "longitude": -74.0060},
    {"id": 10, "name": "Dr. Robert Wilson", "specialization_id": 5,
     "qualifications": ["MD", "PhD", "FAAN"], "experience": "20 years",
     "languages": ["English", "Italian"], "rating": 4.9, "review_count": 110,
     "bio": "Neurologist specializing in movement disorders and neurodegenerative diseases.",
     "consultation_fee": 225, "days": _WEEKDAYS_TT, "time_slots": ["10:00", "13:00", "16:00"],
     "virtual": False, "in_person": True,
     "place_id": "place_10", "address": "18 Lakeshore Neuro Clinic, Chicago",
     "latitude": 41.8827, "longitude": -87.6233},
]

START_OVER_OPTION = "Start from First"

INITIAL_OPTIONS = ["Book an appointment", "Find a doctor", "Get medical advice"]

# Prompt shown when a step is entered: step -> (prompt id, message, options)
PROMPTS = {
    "initial": ("initial-1", "Hello! I'm your telemedicine assistant. How can I help you today?",
                INITIAL_OPTIONS + [START_OVER_OPTION]),
    "patient-info": ("patient-info-1", "Please enter your name:", [START_OVER_OPTION]),
    "symptoms-selection": ("symptoms-1", "Please select your symptoms:",
                           [s["name"] for s in SYMPTOMS] + [START_OVER_OPTION]),
    "specialization": ("specialization-1", "Please select a specialization:",
                       [s["name"] for s in SPECIALIZATIONS] + [START_OVER_OPTION]),
    "consultation-type": ("consultation-type-1", "Would you like a virtual or an in-person consultation?",
                          ["Virtual", "In-person", START_OVER_OPTION]),
    "doctor": ("doctor-1", "Please select a doctor:",
               [d["name"] for d in DOCTORS] + [START_OVER_OPTION]),
    "date": ("date-1", "Please enter your preferred appointment date (YYYY-MM-DD):", [START_OVER_OPTION]),
    "time": ("time-1", "Please select a time slot:", [START_OVER_OPTION]),
    "contact-info": ("contact-1", "Please enter your contact number:", [START_OVER_OPTION]),
    "confirmation": ("confirmation-1", "Please enter your email address:", [START_OVER_OPTION]),
}
