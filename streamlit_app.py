"""
Image Caption Studio - search for a photo and caption it

Run with:
    streamlit run streamlit_app.py
"""
from app.main import main

main()
