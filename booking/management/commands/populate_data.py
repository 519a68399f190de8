"""
Management command to populate the database with demo data.
"""
from datetime import timedelta
from decimal import Decimal
import random

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from booking.models import Doctor, Hospital, Vaccine, VaccineInformation, VaccineInventory


HOSPITALS = [
    {'name': 'City General Hospital', 'location': 'Mumbai, Maharashtra', 'phone': '022-5550101'},
    {'name': 'Sunrise Multispeciality', 'location': 'Pune, Maharashtra', 'phone': '020-5550102'},
    {'name': 'Lakeview Medical Centre', 'location': 'Bengaluru, Karnataka', 'phone': '080-5550103'},
    {'name': 'Green Valley Clinic', 'location': 'New Delhi, Delhi', 'phone': '011-5550104'},
]

DOCTORS = [
    ('Dr. Asha Kulkarni', 'Paediatrics'),
    ('Dr. Rohan Mehta', 'General Medicine'),
    ('Dr. Priya Nair', 'Infectious Diseases'),
    ('Dr. Vikram Singh', 'Immunology'),
]

VACCINES = [
    {
        'name': 'Covishield', 'vaccine_type': 'Viral vector', 'category': 'COVID-19',
        'information': {
            'how_it_works': 'Uses a harmless adenovirus to deliver instructions for the spike protein.',
            'side_effects': 'Sore arm, fatigue, mild fever for one to two days.',
            'precautions': 'Inform the doctor about allergies or bleeding disorders.',
            'effectiveness': 'Strong protection against severe disease after two doses.',
        },
    },
    {
        'name': 'Covaxin', 'vaccine_type': 'Inactivated', 'category': 'COVID-19',
        'information': {
            'how_it_works': 'Contains inactivated virus that trains the immune system.',
            'side_effects': 'Injection site pain, headache, tiredness.',
            'precautions': 'Avoid if you had a severe reaction to a previous dose.',
            'effectiveness': 'Good protection against symptomatic disease.',
        },
    },
    {
        'name': 'Influenza Quadrivalent', 'vaccine_type': 'Inactivated', 'category': 'Influenza',
        'information': {
            'how_it_works': 'Protects against four seasonal influenza strains.',
            'side_effects': 'Soreness, low-grade fever, aches.',
            'precautions': 'Take yearly; consult the doctor if you have egg allergy.',
            'effectiveness': 'Reduces the risk of flu illness by about half.',
        },
    },
    {
        'name': 'Hepatitis B', 'vaccine_type': 'Recombinant', 'category': 'Hepatitis',
        'information': {
            'how_it_works': 'Uses a surface protein of the virus to build immunity.',
            'side_effects': 'Mild soreness, rarely fever.',
            'precautions': 'Complete the full three dose schedule.',
            'effectiveness': 'Over 90 percent protection after the full series.',
        },
    },
    {'name': 'Tetanus Toxoid', 'vaccine_type': 'Toxoid', 'category': 'Tetanus', 'information': None},
    {'name': 'HPV', 'vaccine_type': 'Recombinant', 'category': 'HPV', 'information': None},
]


class Command(BaseCommand):
    help = 'Populate database with demo hospitals, doctors, vaccines and inventory'

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write('Creating demo data...')
        hospitals = self.create_hospitals()
        self.create_doctors(hospitals)
        vaccines = self.create_vaccines()
        self.create_inventory(hospitals, vaccines)
        self.stdout.write(self.style.SUCCESS('Demo data created.'))

    def create_hospitals(self):
        hospitals = []
        for data in HOSPITALS:
            hospital, created = Hospital.objects.get_or_create(name=data['name'], defaults=data)
            hospitals.append(hospital)
            self.stdout.write(f'hospital: {hospital.name}')
        return hospitals

    def create_doctors(self, hospitals):
        for i, hospital in enumerate(hospitals):
            for name, specialization in DOCTORS[i % 2::2]:
                Doctor.objects.get_or_create(
                    hospital=hospital, name=name, defaults={'specialization': specialization}
                )

    def create_vaccines(self):
        vaccines = []
        for data in VACCINES:
            vaccine, created = Vaccine.objects.get_or_create(
                name=data['name'],
                defaults={'vaccine_type': data['vaccine_type'], 'category': data['category']},
            )
            if data['information']:
                VaccineInformation.objects.get_or_create(vaccine=vaccine, defaults=data['information'])
            vaccines.append(vaccine)
            self.stdout.write(f'vaccine: {vaccine.name}')
        return vaccines

    def create_inventory(self, hospitals, vaccines):
        today = timezone.localdate()
        for hospital in hospitals:
            for vaccine in random.sample(vaccines, k=min(4, len(vaccines))):
                VaccineInventory.objects.get_or_create(
                    hospital=hospital,
                    vaccine=vaccine,
                    defaults={
                        'stock_quantity': random.randint(0, 50),
                        'expiry_date': today + timedelta(days=random.randint(-30, 365)),
                        'price': Decimal(random.choice([250, 400, 780, 1200])),
                    },
                )
