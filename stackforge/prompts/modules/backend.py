"""Backend technology modules."""

from __future__ import annotations

import textwrap

from stackforge.prompts.modules.base import ModuleCategory, Technology, TechnologyModule


class BackendModule(TechnologyModule):
    """Backend modules also describe how their container is built and probed."""

    category = ModuleCategory.BACKEND
    port: int = 8000
    health_path: str = "/health"

    def dockerfile(self) -> str:
        return ""


class ExpressModule(BackendModule):
    key = Technology.EXPRESS
    title = "Express.js"
    port = 3000

    def project_structure(self) -> str:
        return textwrap.dedent("""\
            ### Express.js Structure:
            ```
            express-app/
            ├── src/
            │   ├── routes/
            │   │   └── index.js
            │   ├── middleware/
            │   ├── models/
            │   └── controllers/
            ├── server.js              # Entry point
            ├── package.json
            └── .env.example
            ```
            """)

    def dependencies(self) -> str:
        return textwrap.dedent("""\
            ### Express Dependencies:
            ```bash
            npm init -y
            npm install express cors helmet morgan dotenv
            npm install -D nodemon
            ```

            **Essential package.json:**
            ```json
            {
              "dependencies": {
                "express": "^4.19.2",
                "cors": "^2.8.5",
                "helmet": "^7.1.0",
                "morgan": "^1.10.0",
                "dotenv": "^16.4.5"
              },
              "devDependencies": {
                "nodemon": "^3.1.0"
              },
              "scripts": {
                "start": "node server.js",
                "dev": "nodemon server.js"
              }
            }
            ```
            """)

    def configurations(self) -> str:
        return textwrap.dedent("""\
            ### Express Configurations:

            **server.js:**
            ```javascript
            require('dotenv').config();
            const express = require('express');
            const cors = require('cors');
            const helmet = require('helmet');
            const morgan = require('morgan');

            const app = express();
            const PORT = process.env.PORT || 3000;

            app.use(helmet());
            app.use(cors());
            app.use(morgan('combined'));
            app.use(express.json());

            app.get('/health', (req, res) => {
              res.json({ status: 'OK', timestamp: new Date().toISOString() });
            });

            app.listen(PORT, () => {
              console.log(`Server running on port ${PORT}`);
            });
            ```
            """)

    def validation_rules(self) -> str:
        return textwrap.dedent("""\
            ### Express Validation:
            - package.json contains express
            - server.js entry point present
            - cors middleware configured
            - /health endpoint present
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### Express - Errors to avoid:
            - **Missing cors** -> CORS errors in the browser
            - **No helmet** -> missing security headers
            - **Missing health endpoint** -> Docker health checks fail
            - **app.js vs server.js confusion** -> unclear entry point
            """)

    def dockerfile(self) -> str:
        return textwrap.dedent("""\
            ### Node.js Dockerfile:
            ```dockerfile
            FROM node:20-alpine
            WORKDIR /app
            COPY package*.json ./
            RUN npm ci --omit=dev
            COPY . .
            EXPOSE 3000
            HEALTHCHECK --interval=30s --timeout=3s --start-period=5s --retries=3 \\
              CMD wget -qO- http://localhost:3000/health || exit 1
            CMD ["node", "server.js"]
            ```
            """)


class NestJSModule(BackendModule):
    key = Technology.NESTJS
    title = "NestJS"
    port = 3000

    def project_structure(self) -> str:
        return textwrap.dedent("""\
            ### NestJS Structure:
            ```
            nest-app/
            ├── src/
            │   ├── main.ts            # NestFactory.create(AppModule)
            │   ├── app.module.ts
            │   ├── app.controller.ts
            │   └── app.service.ts
            ├── nest-cli.json
            ├── tsconfig.json
            ├── tsconfig.build.json
            └── package.json
            ```
            """)

    def dependencies(self) -> str:
        return textwrap.dedent("""\
            ### NestJS Dependencies:
            ```bash
            npx @nestjs/cli new nest-app --package-manager npm
            ```

            **Essential package.json:**
            ```json
            {
              "dependencies": {
                "@nestjs/common": "^10.0.0",
                "@nestjs/core": "^10.0.0",
                "@nestjs/platform-express": "^10.0.0",
                "reflect-metadata": "^0.2.0",
                "rxjs": "^7.8.1"
              },
              "devDependencies": {
                "@nestjs/cli": "^10.0.0",
                "typescript": "^5.1.3"
              },
              "scripts": {
                "build": "nest build",
                "start": "nest start",
                "start:dev": "nest start --watch",
                "start:prod": "node dist/main"
              }
            }
            ```
            """)

    def validation_rules(self) -> str:
        return textwrap.dedent("""\
            ### NestJS Validation:
            - src/main.ts calls NestFactory.create(AppModule)
            - nest-cli.json present
            - app listens on 0.0.0.0 inside the container
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### NestJS - Errors to avoid:
            - **Missing reflect-metadata** -> decorators fail at runtime
            - **Running ts files in production** -> use node dist/main
            """)

    def dockerfile(self) -> str:
        return textwrap.dedent("""\
            ### NestJS Dockerfile:
            ```dockerfile
            FROM node:20-alpine AS build
            WORKDIR /app
            COPY package*.json ./
            RUN npm ci
            COPY . .
            RUN npm run build

            FROM node:20-alpine
            WORKDIR /app
            COPY package*.json ./
            RUN npm ci --omit=dev
            COPY --from=build /app/dist ./dist
            EXPOSE 3000
            CMD ["node", "dist/main"]
            ```
            """)


class FastAPIModule(BackendModule):
    key = Technology.FASTAPI
    title = "FastAPI"

    def project_structure(self) -> str:
        return textwrap.dedent("""\
            ### FastAPI Structure:
            ```
            api/
            ├── app/
            │   ├── __init__.py
            │   ├── main.py            # FastAPI() instance + routers
            │   └── routers/
            │       └── health.py
            ├── requirements.txt
            └── .env.example
            ```
            """)

    def dependencies(self) -> str:
        return textwrap.dedent("""\
            ### FastAPI Dependencies (requirements.txt):
            ```
            fastapi>=0.110
            uvicorn[standard]>=0.29
            pydantic>=2.6
            python-dotenv>=1.0
            ```
            """)

    def validation_rules(self) -> str:
        return textwrap.dedent("""\
            ### FastAPI Validation:
            - requirements.txt lists fastapi and uvicorn
            - app/main.py defines `app = FastAPI()`
            - GET /health returns 200
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### FastAPI - Errors to avoid:
            - **uvicorn bound to 127.0.0.1** -> unreachable from other containers
            - **Missing __init__.py** -> import errors for the app package
            """)

    def dockerfile(self) -> str:
        return textwrap.dedent("""\
            ### FastAPI Dockerfile:
            ```dockerfile
            FROM python:3.12-slim
            WORKDIR /app
            COPY requirements.txt ./
            RUN pip install --no-cache-dir -r requirements.txt
            COPY . .
            EXPOSE 8000
            CMD ["uvicorn", "app.main:app", "--host", "0.0.0.0", "--port", "8000"]
            ```
            """)


class DjangoModule(BackendModule):
    key = Technology.DJANGO
    title = "Django"

    def project_structure(self) -> str:
        return textwrap.dedent("""\
            ### Django Structure:
            ```
            backend/
            ├── manage.py
            ├── config/
            │   ├── __init__.py
            │   ├── settings.py
            │   ├── urls.py
            │   ├── asgi.py
            │   └── wsgi.py
            ├── requirements.txt
            └── .env.example
            ```
            """)

    def dependencies(self) -> str:
        return textwrap.dedent("""\
            ### Django Dependencies (requirements.txt):
            ```
            Django>=5.0
            gunicorn>=21.2
            psycopg[binary]>=3.1
            ```
            """)

    def validation_rules(self) -> str:
        return textwrap.dedent("""\
            ### Django Validation:
            - manage.py present
            - settings read SECRET_KEY and DEBUG from the environment
            - ALLOWED_HOSTS includes the service name
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### Django - Errors to avoid:
            - **Hard-coded SECRET_KEY** -> leaked credentials
            - **runserver in production** -> use gunicorn
            """)

    def dockerfile(self) -> str:
        return textwrap.dedent("""\
            ### Django Dockerfile:
            ```dockerfile
            FROM python:3.12-slim
            WORKDIR /app
            COPY requirements.txt ./
            RUN pip install --no-cache-dir -r requirements.txt
            COPY . .
            EXPOSE 8000
            CMD ["gunicorn", "config.wsgi:application", "--bind", "0.0.0.0:8000"]
            ```
            """)


class LaravelModule(BackendModule):
    key = Technology.LARAVEL
    title = "Laravel"
    health_path = "/up"

    def project_structure(self) -> str:
        return textwrap.dedent("""\
            ### Laravel Structure:
            ```
            laravel-app/
            ├── app/
            │   ├── Http/Controllers/
            │   │   └── Controller.php
            │   ├── Models/
            │   │   └── User.php
            │   └── Providers/
            ├── bootstrap/
            │   └── app.php            # CRITICAL: application configuration
            ├── config/
            ├── database/
            │   └── migrations/
            ├── routes/
            │   ├── web.php
            │   └── api.php
            ├── resources/
            │   └── views/
            ├── composer.json          # CRITICAL: dependencies
            ├── artisan                # CRITICAL: CLI tool
            └── .env.example
            ```
            """)

    def dependencies(self) -> str:
        return textwrap.dedent("""\
            ### Laravel Dependencies:
            ```bash
            composer create-project laravel/laravel .
            ```

            **Essential composer.json:**
            ```json
            {
                "require": {
                    "php": "^8.2",
                    "laravel/framework": "^11.0",
                    "laravel/sanctum": "^4.0",
                    "laravel/tinker": "^2.9"
                },
                "require-dev": {
                    "phpunit/phpunit": "^11.0"
                },
                "autoload": {
                    "psr-4": {
                        "App\\\\": "app/",
                        "Database\\\\Factories\\\\": "database/factories/",
                        "Database\\\\Seeders\\\\": "database/seeders/"
                    }
                }
            }
            ```
            """)

    def configurations(self) -> str:
        return textwrap.dedent("""\
            ### Laravel Configurations:

            **bootstrap/app.php** (Laravel 11):
            ```php
            <?php

            use Illuminate\\Foundation\\Application;
            use Illuminate\\Foundation\\Configuration\\Exceptions;
            use Illuminate\\Foundation\\Configuration\\Middleware;

            return Application::configure(basePath: dirname(__DIR__))
                ->withRouting(
                    web: __DIR__.'/../routes/web.php',
                    api: __DIR__.'/../routes/api.php',
                    commands: __DIR__.'/../routes/console.php',
                    health: '/up',
                )
                ->withMiddleware(function (Middleware $middleware) {
                    //
                })
                ->withExceptions(function (Exceptions $exceptions) {
                    //
                })->create();
            ```

            **.env setup:**
            ```bash
            cp .env.example .env
            php artisan key:generate
            ```
            """)

    def validation_rules(self) -> str:
        return textwrap.dedent("""\
            ### Laravel Validation:
            - composer.json contains laravel/framework
            - bootstrap/app.php uses Application::configure()
            - artisan file present and executable
            - .env.example present
            - /up route configured for health checks
            """)

    def common_errors(self) -> str:
        return textwrap.dedent("""\
            ### Laravel - Errors to avoid:
            - **Lumen instead of Laravel** for full-stack projects
            - **Pre-Laravel 11 bootstrap/app.php format**
            - **Missing /up route** for health checks
            - **.env without a generated APP_KEY**
            - **Wrong storage permissions** (must be 775)
            """)

    def dockerfile(self) -> str:
        return textwrap.dedent("""\
            ### Laravel Dockerfile:
            ```dockerfile
            FROM php:8.2-fpm

            RUN apt-get update && apt-get install -y \\
                libzip-dev zip unzip git curl libonig-dev \\
                && docker-php-ext-install pdo_mysql mbstring zip exif pcntl \\
                && apt-get clean && rm -rf /var/lib/apt/lists/*

            COPY --from=composer:latest /usr/bin/composer /usr/bin/composer

            WORKDIR /var/www/html
            COPY composer.json composer.lock* ./
            RUN composer install --no-dev --no-scripts --optimize-autoloader

            COPY . .
            RUN chown -R www-data:www-data /var/www/html \\
                && chmod -R 775 /var/www/html/storage

            EXPOSE 8000
            HEALTHCHECK --interval=30s --timeout=3s --start-period=5s --retries=3 \\
              CMD curl -f http://localhost:8000/up || exit 1
            CMD ["php", "artisan", "serve", "--host=0.0.0.0", "--port=8000"]
            ```
            """)
