from gameapi import create_app

app = create_app()

if __name__ == '__main__':
    # Threaded dev server: one request per thread
    app.run(debug=True, threaded=True)
