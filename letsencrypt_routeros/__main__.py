from letsencrypt_routeros.main import main

main()
