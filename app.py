from src.staff_attendance.staff_attendance.main import create_app

app = create_app()

if __name__ == '__main__':
    app.run(debug=app.config.get("DEBUG", False))
