from waka_transport.main import serve

if __name__ == "__main__":
    serve()
