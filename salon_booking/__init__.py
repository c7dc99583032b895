"""Booking API for a nail studio: services, time slots, bookings and portfolio"""
